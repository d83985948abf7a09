import pytest

from panelctl.page import (
    Clock,
    ColumnStart,
    Font,
    Lagging,
    Leading,
    Page,
    WaitingModeAndSpeed,
    replace_european_characters,
)
from panelctl.protocol import MESSAGE_STRING_SIZE, checksum


def test_leading_codes():
    assert {str(member) for member in Leading} == set("ABCDEFGHIJKLMNPQRS")
    assert len({member.code for member in Leading}) == len(Leading)
    for member in Leading:
        payload = str(Page("A", "x", leading=member))
        assert payload.startswith(f"<L1><PA><F{member.code}>")


def test_lagging_codes():
    assert {member.code for member in Lagging} == set("ABCDEFGHIJK")
    assert len(Lagging) == 11
    for member in Lagging:
        payload = str(Page("A", "x", lagging=member))
        assert payload.endswith(f"<WA><F{member.code}>x")


def test_waiting_codes():
    assert {member.code for member in WaitingModeAndSpeed} == set("ABCDEQRSTUabcdeqrstu")
    assert len(WaitingModeAndSpeed) == 20
    for member in WaitingModeAndSpeed:
        payload = str(Page("A", "x", waiting_mode_and_speed=member))
        assert f"<M{member.code}><WA>" in payload


def test_selected_codes_from_table():
    page = Page(
        "A",
        "x",
        leading=Leading.XOPEN,
        lagging=Lagging.HOLD,
        waiting_mode_and_speed=WaitingModeAndSpeed.SLOWEST_SONG3,
    )
    assert str(page) == "<L1><PA><FB><Mu><WA><FK>x"


def test_enums_parse_snake_case_names():
    assert Leading("pen_hello_world") is Leading.PEN_HELLO_WORLD
    assert WaitingModeAndSpeed("middle_slow_song2").code == "d"
    assert Lagging("scroll_left") is Lagging.SCROLL_LEFT


def test_enum_rejects_unknown_name():
    with pytest.raises(ValueError):
        Leading("sideways")


@pytest.mark.parametrize(
    ("font", "text"),
    [
        (Font.NORMAL, "<AA>"),
        (Font.BOLD, "<AB>"),
        (Font.NARROW, "<AC>"),
        (Font.LARGE, "<AD>"),
        (Font.LONG, "<AE>"),
    ],
)
def test_font_commands(font, text):
    assert str(font) == text


def test_clock_commands():
    assert str(Page("A", str(Clock.DATE))).endswith("<FK><KD>")
    assert str(Page("A", str(Clock.TIME))).endswith("<FK><KT>")


def test_column_start_is_hex():
    assert str(ColumnStart(10)) == "<N0A>"


def test_column_start_rejects_out_of_range():
    with pytest.raises(ValueError):
        ColumnStart(256)


def test_replace_european_characters():
    assert replace_european_characters("Grüße") == "Gr" + "<U7C>" + "<U5F>" + "e"


def test_replace_leaves_plain_text():
    assert replace_european_characters("Hello") == "Hello"


def test_replace_drops_pieces_that_do_not_fit():
    assert replace_european_characters("ü" * 5) == "<U7C>" * 3
    assert replace_european_characters("üüüab") == "<U7C>" * 3 + "a"


def test_replace_never_exceeds_message_size():
    result = replace_european_characters("ÄÖÜäöüß" * 3)
    assert len(result.encode("utf-8")) <= MESSAGE_STRING_SIZE


def test_page_defaults():
    page = Page("A", "Hi")
    assert page.leading is Leading.IMMEDIATE
    assert page.lagging is Lagging.HOLD
    assert page.waiting_mode_and_speed is WaitingModeAndSpeed.FASTEST_NORMAL
    assert str(page) == "<L1><PA><FA><MA><WA><FK>Hi"


def test_page_payload_with_effects():
    page = Page(
        "C",
        "Go",
        leading=Leading.SCROLL_LEFT,
        lagging=Lagging.XOPEN,
        waiting_mode_and_speed=WaitingModeAndSpeed.SLOWEST_BLINKING,
    )
    assert str(page) == "<L1><PC><FE><Mr><WA><FB>Go"


def test_page_payload_replaces_umlauts():
    assert str(Page("A", "ü")).endswith("<U7C>")


def test_page_message_limit():
    assert Page("A", "x" * MESSAGE_STRING_SIZE).message == "x" * MESSAGE_STRING_SIZE
    assert Page("A", "ü" * 8).message == "ü" * 8
    with pytest.raises(ValueError):
        Page("A", "ü" * 9)
    with pytest.raises(ValueError):
        Page("A", "x" * (MESSAGE_STRING_SIZE + 1))


def test_page_rejects_bad_id():
    with pytest.raises(ValueError):
        Page("AB", "x")


def test_page_rejects_wrong_effect_type():
    with pytest.raises(TypeError):
        Page("A", "x", leading=Lagging.HOLD)


def test_page_dict_round_trip():
    page = Page(
        "Z",
        "Äpfel",
        leading=Leading.SNOW,
        lagging=Lagging.VOPEN,
        waiting_mode_and_speed=WaitingModeAndSpeed.MIDDLE_FAST_SONG1,
        line=2,
    )
    assert Page.from_dict(page.to_dict()) == page


def test_page_dict_uses_names():
    data = Page("A", "x").to_dict()
    assert data["leading"] == "immediate"
    assert data["lagging"] == "hold"
    assert data["waiting_mode_and_speed"] == "fastest_normal"


def test_page_from_dict_missing_field():
    data = Page("A", "x").to_dict()
    del data["line"]
    with pytest.raises(ValueError):
        Page.from_dict(data)


def test_page_from_dict_unknown_effect():
    data = Page("A", "x").to_dict()
    data["leading"] = "explode"
    with pytest.raises(ValueError):
        Page.from_dict(data)


def test_page_command_framing():
    page = Page("B", "Grüße", leading=Leading.RANDOM)
    framed = page.command(1)
    body = framed[6:-3]
    assert body[:-2] == str(page)
    assert int(body[-2:], 16) == checksum(str(page))
    assert framed.endswith("<E>")