import pytest

from synthkit.palette import (
    Color,
    ColorGroup,
    ColorRole,
    Palette,
    PaletteSettings,
    ROLE_KEYS,
    add_named_palette_conf,
    color_role,
    delete_named_palette_conf,
    load_named_palette,
    load_named_palette_conf,
    named_palette,
    named_palette_conf,
    named_palette_list,
    save_named_palette,
    save_named_palette_conf,
)


def _custom_palette():
    pal = Palette()
    pal.set_color(ColorGroup.ACTIVE, ColorRole.WINDOW, Color.from_name("#123456"))
    pal.set_color(ColorGroup.INACTIVE, ColorRole.WINDOW, Color.from_name("#234567"))
    pal.set_color(ColorGroup.DISABLED, ColorRole.WINDOW, Color.from_name("#345678"))
    pal.set_color(ColorGroup.ACTIVE, ColorRole.HIGHLIGHT, Color.from_name("#ff8800"))
    return pal


def test_color_name_round_trip():
    assert Color.from_name("#1a2b3c").name() == "#1a2b3c"
    assert Color.from_name("#1A2B3C") == Color(0x1A, 0x2B, 0x3C)


def test_color_short_form():
    assert Color.from_name("#abc").name() == "#aabbcc"


def test_color_invalid_name():
    with pytest.raises(ValueError):
        Color.from_name("nonsense")
    with pytest.raises(ValueError):
        Color.from_name("#12345")
    with pytest.raises(ValueError):
        Color(300, 0, 0)


def test_color_value_is_brightest_component():
    assert Color(10, 200, 30).value() == 200


def test_lighter_and_darker():
    c = Color(40, 80, 120)
    assert c.lighter(150).value() > c.value()
    assert c.darker(200).value() < c.value()
    assert c.lighter(100) == c
    assert c.darker(100) == c
    assert c.lighter(0) == c


def test_darker_white_halves_value():
    assert 127 <= Color(255, 255, 255).darker(200).value() <= 128


def test_color_role_lookup():
    assert color_role("Window") is ColorRole.WINDOW
    assert color_role("ToolTipText") is ColorRole.TOOL_TIP_TEXT
    assert color_role("Unknown") is ColorRole.NO_ROLE
    assert all(color_role(key) is role for key, role in ROLE_KEYS)


def test_palette_set_color_marks_role_and_copy_is_independent():
    pal = Palette()
    assert pal.resolve_mask == 0
    pal.set_color(ColorGroup.ACTIVE, ColorRole.BASE, Color(1, 2, 3))
    assert pal.resolve_mask == 1 << int(ColorRole.BASE)
    dup = pal.copy()
    assert dup == pal
    dup.set_color(ColorGroup.ACTIVE, ColorRole.BASE, Color(4, 5, 6))
    assert pal.color(ColorGroup.ACTIVE, ColorRole.BASE) == Color(1, 2, 3)


def test_save_and_load_in_settings():
    settings = PaletteSettings()
    source = _custom_palette()
    assert save_named_palette(settings, "Mine", source) is True
    assert "Mine" in named_palette_list(settings)
    target = Palette()
    assert load_named_palette(settings, "Mine", target) is True
    for _, role in ROLE_KEYS:
        for group in ColorGroup:
            assert target.color(group, role).name() == source.color(group, role).name()


def test_load_missing_theme():
    settings = PaletteSettings()
    pal = Palette()
    assert load_named_palette(settings, "Absent", pal) is False
    assert load_named_palette(None, "Absent", pal) is False
    assert pal.resolve_mask == 0


def test_none_settings():
    assert named_palette_list(None) == []
    assert named_palette_conf(None, "x") == ""
    assert save_named_palette(None, "x", Palette()) is False


def test_conf_file_round_trip(tmp_path):
    path = tmp_path / "theme.conf"
    source = _custom_palette()
    assert save_named_palette_conf("Deep", path, source) is True
    assert path.is_file()
    target = Palette()
    assert load_named_palette_conf("Deep", path, target) is True
    assert target.color(ColorGroup.INACTIVE, ColorRole.WINDOW) == \
        source.color(ColorGroup.INACTIVE, ColorRole.WINDOW)
    assert load_named_palette_conf("Other", path, Palette()) is False


def test_register_and_delete_conf(tmp_path):
    settings = PaletteSettings()
    add_named_palette_conf(settings, "Deep", str(tmp_path / "deep.conf"))
    assert named_palette_conf(settings, "Deep") == str(tmp_path / "deep.conf")
    assert named_palette_list(settings) == ["Deep"]
    delete_named_palette_conf(settings, "Deep")
    assert named_palette_conf(settings, "Deep") == ""
    assert named_palette_list(settings) == []


def test_register_replaces_stored_theme():
    settings = PaletteSettings()
    save_named_palette(settings, "Deep", _custom_palette())
    add_named_palette_conf(settings, "Deep", "elsewhere.conf")
    assert named_palette_list(settings) == ["Deep"]
    assert load_named_palette(settings, "Deep", Palette()) is False


def test_named_palette_from_registered_file(tmp_path):
    path = tmp_path / "deep.conf"
    source = _custom_palette()
    save_named_palette_conf("Deep", path, source)
    settings = PaletteSettings()
    add_named_palette_conf(settings, "Deep", str(path))
    target = Palette()
    assert named_palette(settings, "Deep", target) is True
    assert target.color(ColorGroup.ACTIVE, ColorRole.HIGHLIGHT) == \
        source.color(ColorGroup.ACTIVE, ColorRole.HIGHLIGHT)


def test_named_palette_nothing_found_light_base():
    assert named_palette(None, "missing", Palette()) is False


def test_named_palette_dark_fixup():
    pal = Palette()
    window = Color(50, 50, 50)
    pal.set_color(ColorGroup.ACTIVE, ColorRole.BASE, Color(20, 20, 20))
    pal.set_color(ColorGroup.ACTIVE, ColorRole.WINDOW, window)
    assert named_palette(None, "", pal) is True
    assert pal.color(ColorGroup.ACTIVE, ColorRole.LIGHT) == window.lighter(140)
    assert pal.color(ColorGroup.INACTIVE, ColorRole.SHADOW) == window.darker(180)
    mid = pal.color(ColorGroup.ACTIVE, ColorRole.MID)
    assert pal.color(ColorGroup.DISABLED, ColorRole.HIGHLIGHT) == mid
    assert pal.color(ColorGroup.DISABLED, ColorRole.BUTTON_TEXT) == mid


def test_named_palette_fixup_flag_skips_dark_fix():
    pal = Palette()
    pal.set_color(ColorGroup.ACTIVE, ColorRole.BASE, Color(20, 20, 20))
    before = pal.copy()
    assert named_palette(None, "", pal, True) is False
    assert pal == before


def test_settings_persist(tmp_path):
    path = tmp_path / "settings.conf"
    with PaletteSettings(path) as settings:
        settings["ColorThemes/A"] = "a, file.conf"
        settings["PaletteEditor/DefaultDir"] = str(tmp_path)
        settings["ColorThemes/B/Window"] = ["#010203", "#040506", "#070809"]
        settings["Loose"] = "value"
    reloaded = PaletteSettings(path)
    assert reloaded["ColorThemes/A"] == "a, file.conf"
    assert reloaded["/PaletteEditor/DefaultDir/"] == str(tmp_path)
    assert reloaded["ColorThemes/B/Window"] == ["#010203", "#040506", "#070809"]
    assert reloaded["Loose"] == "value"
    assert len(reloaded) == 4


def test_settings_without_path_cannot_save():
    with pytest.raises(ValueError):
        PaletteSettings().save()
    with pytest.raises(KeyError):
        PaletteSettings()["missing"]