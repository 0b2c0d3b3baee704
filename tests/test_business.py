from app.business import format_phone_number, phone_link, settings_from_phone_input


def test_ten_digit_numbers_are_formatted():
    assert format_phone_number("9033996021") == "(903) 399-6021"
    assert format_phone_number("903.399.6021") == "(903) 399-6021"


def test_other_lengths_are_left_alone():
    assert format_phone_number("399-6021") == "399-6021"


def test_phone_link_uses_us_prefix():
    assert phone_link("(903) 399-6021") == "tel:+19033996021"


def test_settings_from_phone_input():
    settings = settings_from_phone_input("(903) 555-0100", " owner@thedetailproz.com ", "")
    assert settings.id == "default"
    assert settings.phone_number == "9035550100"
    assert settings.phone_formatted == "(903) 555-0100"
    assert settings.phone_link == "tel:+19035550100"
    assert settings.email == "owner@thedetailproz.com"
