from __future__ import annotations

from datetime import datetime

from eltakoms.rollup import main
from eltakoms.rollup.rollup import RollupStats, parse_summary_line, rollup

BASE = 1_700_000_100  # multiple of 300


def _line(epoch: int, compact: str = "t+07.6s01w63e00od999v01.2r") -> str:
    stamp = datetime.fromtimestamp(epoch).strftime("%Y-%m-%d %H:%M:%S")
    return f"{stamp} {compact}\n"


def test_parse_summary_line() -> None:
    epoch, reading = parse_summary_line(_line(BASE))

    assert int(epoch) == BASE
    assert reading.temperature_tenths == 76
    assert reading.dawn == 999
    assert parse_summary_line("2008-04-03 17:03:20 nonsense") is None
    assert parse_summary_line("t+07.6s01w63e00od999v01.2r") is None


def test_rollup_closes_five_minute_windows() -> None:
    lines = [_line(BASE + 60 * k) for k in range(11)]
    lines[3] = _line(BASE + 180, "t+07.6s01w63e00od999v05.0R")

    updates = list(rollup(lines, interval=300))

    assert updates == [
        f"{BASE + 300}:+07.6:05.0:1:00:01:63:999:0",
        f"{BASE + 600}:+07.6:01.2:0:00:01:63:999:0",
    ]


def test_rollup_averages_and_trailing_window_dropped() -> None:
    lines = [
        _line(BASE, "t-01.0s10w00e00od100v00.0r"),
        _line(BASE + 100, "t-02.0s11w00e00Od200v02.0r"),
        _line(BASE + 300, "t-03.0s12w00e00od300v01.0r"),
        _line(BASE + 400, "t+20.0s99w99e99od999v09.9R"),
    ]

    updates = list(rollup(lines, interval=300))

    assert updates == [f"{BASE + 300}:-02.0:02.0:0:00:11:00:200:1"]


def test_malformed_lines_are_skipped_and_counted(caplog) -> None:
    lines = [_line(BASE), "garbage\n", "\n", _line(BASE + 300)]
    stats = RollupStats()

    updates = list(rollup(lines, interval=300, stats=stats))

    assert len(updates) == 1
    assert stats.lines == 3
    assert stats.skipped == 1
    assert stats.records == 1
    assert "Skipping malformed line 2" in caplog.text


def test_main_prints_updates(tmp_path, capsys) -> None:
    log = tmp_path / "eltako.log"
    log.write_text("".join(_line(BASE + 60 * k) for k in range(6)))

    assert main([str(log), "-i", "300"]) == 0

    assert capsys.readouterr().out.splitlines() == [f"{BASE + 300}:+07.6:01.2:0:00:01:63:999:0"]


def test_main_missing_file(tmp_path) -> None:
    assert main([str(tmp_path / "absent.log")]) == 1
