"""Tests for ymlfeed/scheduling.py"""

from ymlfeed.scheduling import Schedule, SchedulerAdmin, SystemdUnitWriter


def test_writer_is_scheduler_admin(tmp_path):
    assert isinstance(SystemdUnitWriter(str(tmp_path), "/bin/true"), SchedulerAdmin)


def test_service_unit():
    writer = SystemdUnitWriter("/x", "/usr/bin/python3 /opt/app/scripts/build_feeds.py --quiet", working_dir="/opt/app")
    unit = writer.service_unit(Schedule("daily"))
    assert unit.splitlines() == [
        "[Unit]",
        "Description=Build YML product feeds",
        "",
        "[Service]",
        "Type=oneshot",
        "WorkingDirectory=/opt/app",
        "ExecStart=/usr/bin/python3 /opt/app/scripts/build_feeds.py --quiet",
    ]


def test_service_unit_without_working_dir():
    unit = SystemdUnitWriter("/x", "cmd").service_unit(Schedule("daily"))
    assert "WorkingDirectory" not in unit


def test_timer_unit():
    unit = SystemdUnitWriter("/x", "cmd").timer_unit(Schedule("*-*-* 03:00:00", description="Feeds"))
    assert "Description=Feeds (timer)" in unit
    assert "OnCalendar=*-*-* 03:00:00" in unit
    assert "Persistent=true" in unit
    assert unit.endswith("WantedBy=timers.target\n")


def test_install_writes_both_units(tmp_path):
    unit_dir = tmp_path / "units"
    writer = SystemdUnitWriter(str(unit_dir), "cmd", unit_name="feeds")

    result = writer.install(Schedule("hourly"))

    assert result.ok
    assert result.paths == [str(unit_dir / "feeds.service"), str(unit_dir / "feeds.timer")]
    assert "OnCalendar=hourly" in (unit_dir / "feeds.timer").read_text(encoding="utf-8")
    assert "systemctl enable --now feeds.timer" in result.message


def test_install_rejects_empty_schedule(tmp_path):
    result = SystemdUnitWriter(str(tmp_path / "units"), "cmd").install(Schedule("  "))
    assert not result.ok
    assert result.paths == []
    assert not (tmp_path / "units").exists()


def test_install_reports_write_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    result = SystemdUnitWriter(str(blocker / "units"), "cmd").install(Schedule("daily"))

    assert not result.ok
    assert "Error" in result.message
