from sc2botkit.version import (
    BASE_BUILD,
    DATA_BUILD,
    DATA_VERSION,
    GAME_VERSION,
    format_version,
    version_report,
)


def test_format_version_with_build_suffix():
    assert format_version("5.0.7.84643", 84643) == "5.0.7.84643"


def test_format_version_without_suffix():
    assert format_version("5.0.7", 84643) == "5.0.7(84643)"


def test_report_matching():
    report = version_report(GAME_VERSION, BASE_BUILD, DATA_BUILD, DATA_VERSION)
    assert report == ["(sc2) 5.0.7.84643 (thumbsup)"]


def test_report_game_mismatch_only():
    report = version_report("4.10.0.75689", 75689, DATA_BUILD, DATA_VERSION)
    assert report == ["(sc2) 4.10.0.75689 (thumbsdown) (5.0.7.84643)"]


def test_report_data_mismatch():
    report = version_report(GAME_VERSION, BASE_BUILD, 1, "ABC")
    assert len(report) == 2
    assert report[0].endswith("(thumbsup)")
    assert report[1] == (
        "(poo) (poo) (angry) (poo) (poo) 1:ABC (scared) 84643:A389D1F7DF9DD792FBE980533B7119FF"
    )