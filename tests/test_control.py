import pytest

from plugbot.control import NOT_FOUND, ControlRegistry, Options


@pytest.fixture
def registry(tmp_path):
    with ControlRegistry(str(tmp_path / "control" / "plugins.db")) as reg:
        yield reg


def test_default_enabled(registry):
    control = registry.register("atri")
    assert control.is_enabled_in(1) is True
    assert control.is_enabled_in(0) is True


def test_disable_on_default(registry):
    control = registry.register("atri", Options(disable_on_default=True))
    assert control.is_enabled_in(1) is False
    control.enable(1)
    assert control.is_enabled_in(1) is True
    assert control.is_enabled_in(2) is False


def test_group_overrides_global(registry):
    control = registry.register("chat")
    control.disable(0)
    assert control.is_enabled_in(5) is False
    control.enable(5)
    assert control.is_enabled_in(5) is True
    assert control.is_enabled_in(6) is False


def test_reset_falls_back(registry):
    control = registry.register("chat")
    control.disable(5)
    control.reset(5)
    assert control.is_enabled_in(5) is True


def test_reset_global_ignored(registry):
    control = registry.register("chat")
    control.disable(0)
    control.reset(0)
    assert control.is_enabled_in(0) is False


def test_allows_private_uses_negated_user(registry):
    control = registry.register("chat")
    control.disable(-42)
    assert control.allows(0, 42) is False
    assert control.allows(0, 43) is True
    assert control.allows(9, 42) is True


def test_lookup_and_delete(registry):
    control = registry.register("choose")
    assert registry.lookup("choose") is control
    registry.delete("choose")
    assert registry.lookup("choose") is None
    assert registry.items() == []


def test_settings_survive_delete(registry):
    registry.register("choose").disable(3)
    registry.delete("choose")
    assert registry.register("choose").is_enabled_in(3) is False


def test_persistence(tmp_path):
    path = str(tmp_path / "plugins.db")
    with ControlRegistry(path) as first:
        first.register("atri").disable(5)
    with ControlRegistry(path) as second:
        assert second.register("atri").is_enabled_in(5) is False


def test_command_enable_disable(registry):
    control = registry.register("atri")
    assert registry.handle_command("禁用", "atri", 7, 1) == "已禁用服务: atri"
    assert control.is_enabled_in(7) is False
    assert registry.handle_command("enable", "atri", 7, 1) == "已启用服务: atri"
    assert control.is_enabled_in(7) is True


def test_command_private(registry):
    control = registry.register("atri")
    registry.handle_command("disable", "atri", 0, 42)
    assert control.is_enabled_in(-42) is False
    assert control.is_enabled_in(0) is True


def test_command_global(registry):
    control = registry.register("atri")
    registry.handle_command("全局禁用", "atri", 7, 1)
    assert control.is_enabled_in(0) is False
    assert control.is_enabled_in(123) is False
    registry.handle_command("enableall", "atri", 7, 1)
    assert control.is_enabled_in(123) is True


def test_command_reset(registry):
    control = registry.register("atri")
    control.disable(7)
    assert registry.handle_command("reset", "atri", 7, 1) == "已还原服务的默认启用状态: atri"
    assert control.is_enabled_in(7) is True


def test_command_not_found(registry):
    assert registry.handle_command("enable", "missing", 7, 1) == NOT_FOUND
    assert registry.usage("missing") == NOT_FOUND


def test_command_unknown(registry):
    with pytest.raises(ValueError):
        registry.handle_command("frobnicate", "atri", 7, 1)


def test_usage(registry):
    registry.register("b14", Options(help="base16384加解密"))
    registry.register("plain")
    assert registry.handle_command("用法", "b14", 7, 1) == "base16384加解密"
    assert registry.usage("plain") == "该服务无帮助!"


def test_service_list(registry):
    registry.register("a")
    registry.register("b", Options(disable_on_default=True))
    expected = "---服务列表---\n1: ●a\n2: ○b"
    assert registry.service_list(0) == expected
    assert registry.handle_command("service_list", "", 0, 1) == expected