from covidash.core.utils.text import capitalize, to_title_case


def test_capitalize_first_character_only():
    assert capitalize("delhi") == "Delhi"
    assert capitalize("tamil nadu") == "Tamil nadu"
    assert capitalize("") == ""


def test_capitalize_non_string_is_empty():
    assert capitalize(None) == ""
    assert capitalize(5) == ""


def test_to_title_case():
    assert to_title_case("andaman AND nicobar islands") == "Andaman And Nicobar Islands"
    # a hyphenated run is one word
    assert to_title_case("dadra-NAGAR haveli") == "Dadra-nagar Haveli"
