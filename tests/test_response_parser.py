from core.services.response_parser import parse_reply, split_labels


def test_directive_is_stripped_and_labels_trimmed():
    parsed = parse_reply("Hello there BUTTONS: A, B ,C")

    assert parsed.display_text == "Hello there"
    assert parsed.suggestions == ("A", "B", "C")


def test_plain_reply_has_no_suggestions():
    parsed = parse_reply("Just text")

    assert parsed.display_text == "Just text"
    assert parsed.suggestions == ()


def test_empty_directive_degrades_to_no_suggestions():
    for raw in ("Hi BUTTONS:", "Hi BUTTONS: ", "Hi BUTTONS: , ,"):
        parsed = parse_reply(raw)
        assert parsed.display_text == "Hi"
        assert parsed.suggestions == ()


def test_marker_is_case_insensitive():
    parsed = parse_reply("Welcome!\n\nbuttons: Read a poem, About the author")

    assert parsed.display_text == "Welcome!"
    assert parsed.suggestions == ("Read a poem", "About the author")


def test_stray_commas_are_dropped_and_duplicates_kept():
    assert split_labels("A,,B, ,A") == ("A", "B", "A")


def test_markdown_before_directive_is_preserved():
    raw = "## Themes\n\n- love\n- loss\nBUTTONS: Tell me more"
    parsed = parse_reply(raw)

    assert parsed.display_text == "## Themes\n\n- love\n- loss"
    assert parsed.suggestions == ("Tell me more",)


def test_none_and_empty_input():
    assert parse_reply(None).display_text == ""
    assert parse_reply("").suggestions == ()


def test_directive_ends_at_end_of_line():
    parsed = parse_reply("Intro BUTTONS: A, B\n\nThanks!")

    assert parsed.suggestions == ("A", "B")
    assert parsed.display_text == "Intro \n\nThanks!"
    assert all("\n" not in label for label in parsed.suggestions)


def test_windows_line_ending_is_not_part_of_a_label():
    parsed = parse_reply("Hello BUTTONS: A, B\r\n")

    assert parsed.suggestions == ("A", "B")
    assert parsed.display_text == "Hello"
