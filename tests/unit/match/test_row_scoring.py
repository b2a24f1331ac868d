from byteclasser.match.scoring import RowResult, derive_text, score_row
from byteclasser.targets.models import Configuration


def build(make_document, labels) -> Configuration:
    return Configuration.from_dict(make_document(labels))


def test_derive_text_joins_with_single_space():
    assert derive_text(["abcabc", "x"]) == "abcabc x"
    assert derive_text(["a", "", "b"]) == "a  b"
    assert derive_text([]) == ""


def test_concrete_scenario(make_document, make_target):
    config = build(make_document, {"alpha": [make_target("6162", weight=2.0)]})
    result = score_row(0, ["abcabc", "x"], config)
    assert isinstance(result, RowResult)
    assert result.row_id == 0
    assert result.text == "abcabc x"
    assert result.scores == {"alpha": 4.0}


def test_every_label_present_defaulting_to_zero(make_document, make_target):
    config = build(make_document, {
        "alpha": [make_target("6162")],
        "beta": [make_target("7a7a")],
        "empty": [],
    })
    result = score_row(3, ["ab"], config)
    assert result.scores == {"alpha": 1.0, "beta": 0.0, "empty": 0.0}


def test_score_is_linear_sum(make_document, make_target):
    config = build(make_document, {
        "mixed": [
            make_target("61", weight=1.5),      # 'a' x3
            make_target("62", weight=-2.0),     # 'b' x2
            make_target("6162", weight=0.25),   # 'ab' x2
        ],
    })
    result = score_row(0, ["abab", "a"], config)
    assert result.scores["mixed"] == 3 * 1.5 + 2 * -2.0 + 2 * 0.25


def test_zero_weight_never_changes_score(make_document, make_target):
    with_zero = build(make_document, {"l": [make_target("61", weight=1.0), make_target("62", weight=0.0)]})
    without = build(make_document, {"l": [make_target("61", weight=1.0)]})
    fields = ["bbbb", "ab"]
    assert score_row(0, fields, with_zero).scores == score_row(0, fields, without).scores


def test_invalid_pattern_is_skipped(make_document, make_target):
    config = build(make_document, {"alpha": [make_target("6g", weight=100.0), make_target("61", weight=1.0)]})
    result = score_row(0, ["aa"], config)
    assert result.scores == {"alpha": 2.0}


def test_matching_is_on_utf8_bytes(make_document, make_target):
    # 'é' is c3 a9 in UTF-8
    config = build(make_document, {"accent": [make_target("c3a9", weight=1.0)]})
    result = score_row(0, ["café", "é"], config)
    assert result.scores["accent"] == 2.0


def test_field_separator_participates_in_matching(make_document, make_target):
    # "a b" only exists across the join
    config = build(make_document, {"joined": [make_target("612062")]})
    assert score_row(0, ["a", "b"], config).scores["joined"] == 1.0
    assert score_row(0, ["ab"], config).scores["joined"] == 0.0


def test_score_row_is_deterministic(make_document, make_target):
    config = build(make_document, {"x": [make_target("78", weight=0.1)], "y": [make_target("79")]})
    fields = ["xxyxx", "yx"]
    assert score_row(5, fields, config) == score_row(5, fields, config)
