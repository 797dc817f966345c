import pytest

from sysbro.services import (
    COLUMN_COUNT,
    ServiceItem,
    ServiceModel,
    parse_description,
    parse_unit_files,
    startup_items_message,
)

UNIT_FILES = (
    "UNIT FILE                              STATE\n"
    "accounts-daemon.service                enabled\n"
    "getty@.service                         enabled\n"
    "bluetooth.service                      disabled\n"
    "cron.service                           enabled\n"
    "\n"
    "4 unit files listed.\n"
)


class FakeRunner:
    def __init__(self, switch_code=0):
        self.calls = []
        self.switch_code = switch_code

    def __call__(self, argv):
        argv = list(argv)
        self.calls.append(argv)
        if argv[:2] == ["systemctl", "list-unit-files"]:
            return 0, UNIT_FILES
        if argv[:2] == ["systemctl", "cat"]:
            return 0, f"[Unit]\nDescription=Desc of {argv[2]}\n"
        if argv[0] == "pkexec":
            return self.switch_code, ""
        return 1, ""


def test_parse_unit_files_skips_templates_and_headers():
    assert parse_unit_files(UNIT_FILES) == [
        ("accounts-daemon", True),
        ("bluetooth", False),
        ("cron", True),
    ]


def test_parse_unit_files_empty():
    assert parse_unit_files("") == []


def test_parse_description_reads_value():
    assert parse_description("[Unit]\nDescription=Accounts Service\nAfter=x\n") == "Accounts Service"


def test_parse_description_missing_is_unknown():
    assert parse_description("[Unit]\nAfter=x\n") == "Unknown"


def test_startup_items_message():
    assert startup_items_message(3) == "Your computer has 3 startup items"


def test_load_services_builds_items():
    model = ServiceModel(locale="C", runner=FakeRunner())
    assert [item.name for item in model.items] == ["accounts-daemon", "bluetooth", "cron"]
    assert model.items[0].description == "Desc of accounts-daemon"
    assert model.enabled_count() == 2
    assert len(model) == 3


def test_chinese_locale_uses_known_description():
    model = ServiceModel(locale="zh_CN", runner=FakeRunner())
    assert model.description("bluetooth") == "蓝牙服务"
    assert model.description("cron") == "常规后台程序处理守护进程"
    assert model.description("unlisted") == "Desc of unlisted"


def test_listeners_receive_count_plus_one():
    model = ServiceModel(locale="C", runner=FakeRunner(), load=False)
    seen = []
    model.subscribe(seen.append)
    model.load_services()
    assert seen == [model.enabled_count() + 1]


def test_switch_status_success_flips():
    runner = FakeRunner()
    model = ServiceModel(locale="C", runner=runner)
    assert model.switch_status("bluetooth") is True
    assert runner.calls[-1] == ["pkexec", "sysbro-service-mgr", "enable", "bluetooth"]
    assert next(i for i in model.items if i.name == "bluetooth").status is True
    assert model.switch_status("bluetooth") is True
    assert runner.calls[-1][2] == "disable"


def test_switch_status_failure_keeps_state():
    model = ServiceModel(locale="C", runner=FakeRunner(switch_code=126))
    before = model.enabled_count()
    assert model.switch_status("cron") is False
    assert model.enabled_count() == before


def test_switch_unknown_service_raises():
    model = ServiceModel(locale="C", runner=FakeRunner())
    with pytest.raises(KeyError):
        model.switch_status("missing")


def test_headers():
    model = ServiceModel(locale="C", runner=FakeRunner(), load=False)
    assert [model.header(i) for i in range(COLUMN_COUNT)] == ["Service Name", "Status"]
    assert model.header(2) is None


def test_item_labels():
    item = ServiceItem("cron", "d", True)
    assert (item.status_text, item.toggle_label) == ("Enabled", "Disable")
    item.status = False
    assert (item.status_text, item.toggle_label) == ("Disabled", "Enable")