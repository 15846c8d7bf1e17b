"""
Scheduled Build Trigger

SchedulerAdmin is the capability for installing a periodic build trigger.
The build pipeline never depends on how a trigger is installed.

SystemdUnitWriter writes a oneshot service plus a timer unit. Enabling the
timer (systemctl daemon-reload / enable --now) is left to a privileged
operator.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Schedule:
    """When to run, as a systemd OnCalendar expression (e.g. "*-*-* 03:00:00")."""
    on_calendar: str
    description: str = "Build YML product feeds"


@dataclass
class InstallResult:
    """Outcome of a trigger installation."""
    ok: bool
    message: str
    paths: List[str] = field(default_factory=list)


class SchedulerAdmin(ABC):
    """Installs a periodic build trigger."""

    @abstractmethod
    def install(self, schedule: Schedule) -> InstallResult:
        """Install or replace the trigger; failures are reported, not raised."""


class SystemdUnitWriter(SchedulerAdmin):
    """
    Writes <unit_name>.service and <unit_name>.timer into unit_dir.

    Usage:
        writer = SystemdUnitWriter("/etc/systemd/system", "/opt/ymlfeed/scripts/build_feeds.py")
        result = writer.install(Schedule("*-*-* 03:00:00"))
    """

    def __init__(self, unit_dir: str, command: str, unit_name: str = "ymlfeed-build", working_dir: str = ""):
        self.unit_dir = unit_dir
        self.command = command
        self.unit_name = unit_name
        self.working_dir = working_dir

    def service_unit(self, schedule: Schedule) -> str:
        lines = [
            "[Unit]",
            f"Description={schedule.description}",
            "",
            "[Service]",
            "Type=oneshot",
        ]
        if self.working_dir:
            lines.append(f"WorkingDirectory={self.working_dir}")
        lines.append(f"ExecStart={self.command}")
        return "\n".join(lines) + "\n"

    def timer_unit(self, schedule: Schedule) -> str:
        return "\n".join([
            "[Unit]",
            f"Description={schedule.description} (timer)",
            "",
            "[Timer]",
            f"OnCalendar={schedule.on_calendar}",
            "Persistent=true",
            "",
            "[Install]",
            "WantedBy=timers.target",
        ]) + "\n"

    def install(self, schedule: Schedule) -> InstallResult:
        if not schedule.on_calendar.strip():
            return InstallResult(ok=False, message="Empty OnCalendar expression")

        service_path = os.path.join(self.unit_dir, f"{self.unit_name}.service")
        timer_path = os.path.join(self.unit_dir, f"{self.unit_name}.timer")
        try:
            os.makedirs(self.unit_dir, exist_ok=True)
            with open(service_path, "w", encoding="utf-8") as f:
                f.write(self.service_unit(schedule))
            with open(timer_path, "w", encoding="utf-8") as f:
                f.write(self.timer_unit(schedule))
        except OSError as e:
            logger.error("Could not write systemd units: %s", e)
            return InstallResult(ok=False, message=f"{type(e).__name__}: {e}")

        logger.info("Wrote %s and %s", service_path, timer_path)
        return InstallResult(
            ok=True,
            message=f"Run: systemctl daemon-reload && systemctl enable --now {self.unit_name}.timer",
            paths=[service_path, timer_path],
        )
