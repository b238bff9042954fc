from anthropometric.utils.merge import merge_profile

FIELDS = ("name", "age", "country", "sport")
EXISTING = {"name": "Ana", "age": 21, "country": "PT", "sport": "rowing"}


def test_absent_and_blank_fields_keep_stored_values():
    merged = merge_profile(EXISTING, {"name": "", "country": "   ", "sport": None}, FIELDS)
    assert merged == EXISTING


def test_supplied_fields_override():
    merged = merge_profile(EXISTING, {"sport": "swimming"}, FIELDS)
    assert merged == {**EXISTING, "sport": "swimming"}


def test_zero_is_a_real_value():
    merged = merge_profile(EXISTING, {"age": 0}, FIELDS)
    assert merged["age"] == 0


def test_missing_stored_value_stays_missing():
    merged = merge_profile({"name": "Ana"}, {}, ("name", "phone"))
    assert merged == {"name": "Ana"}
