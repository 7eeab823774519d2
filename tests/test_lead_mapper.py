import pytest

from leadsheet.models.lead import COLUMNS, column_of, to_lead, to_row, upgrade_legacy_row


def test_to_lead_maps_fixed_columns():
    lead = to_lead(["Ravi", "9990000002", "13 Jan", "Interested", "10 Jan", "r", "1", "10 Jan", "11:30"], 4)

    assert lead.index == 4
    assert lead.name == "Ravi"
    assert lead.phone == "9990000002"
    assert lead.next_call_date == "13 Jan"
    assert lead.status == "Interested"
    assert lead.last_called == "10 Jan"
    assert lead.remarks == "r"
    assert lead.follow_ups == 1
    assert lead.follow_up_dates == "10 Jan"
    assert lead.call_time == "11:30"


def test_to_lead_defaults_missing_cells():
    lead = to_lead(["Meena"], 2)
    assert lead.phone == ""
    assert lead.remarks == ""
    assert lead.follow_ups == 0


def test_to_lead_non_numeric_count_is_zero():
    assert to_lead(["A", "", "", "", "", "", "n/a"], 0).follow_ups == 0


def test_lead_serializes_with_camel_case_names():
    data = to_lead(["A", "1", "12 Jan"], 0).model_dump(by_alias=True)
    assert set(data) == {
        "index", "name", "phone", "nextCallDate", "status", "lastCalled",
        "remarks", "followUps", "followUpDates", "callTime",
    }


def test_column_of():
    assert column_of("name") == "A"
    assert column_of("next_call_date") == "C"
    assert column_of("status") == "D"
    assert column_of("remarks") == "F"
    assert column_of("call_time") == "I"


@pytest.mark.parametrize("first,last", [("D", "I"), ("F", "F"), ("C", "C"), ("A", "I")])
def test_written_span_reads_back(first, last):
    lead = to_lead(["Asha", "9990000001", "12 Jan", "Called", "12 Jan", "12 Jan - x", "1", "12 Jan", "14:05"], 0)
    start, end = ord(first) - ord("A"), ord(last) - ord("A") + 1
    row = [""] * len(COLUMNS)
    row[start:end] = to_row(lead, first, last)

    reread = to_lead(row, 0)
    for field in COLUMNS[start:end]:
        assert getattr(reread, field) == getattr(lead, field)


def test_to_row_rejects_reversed_span():
    with pytest.raises(ValueError):
        to_row(to_lead([], 0), "I", "D")


def test_upgrade_legacy_row_inserts_remarks():
    legacy = ["Asha", "1", "12 Jan", "Called", "12 Jan", "1", "12 Jan", "14:05"]
    row = upgrade_legacy_row(legacy)

    assert len(row) == len(COLUMNS)
    lead = to_lead(row, 0)
    assert lead.remarks == ""
    assert lead.follow_ups == 1
    assert lead.follow_up_dates == "12 Jan"
    assert lead.call_time == "14:05"


def test_upgrade_legacy_row_pads_short_rows():
    assert upgrade_legacy_row(["Asha", "1"]) == ["Asha", "1", "", "", "", "", "", "", ""]


def test_upgrade_legacy_row_rejects_wide_rows():
    with pytest.raises(ValueError):
        upgrade_legacy_row([""] * 9)
