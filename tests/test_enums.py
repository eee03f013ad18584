from kakeibo.domain.enums import FlowType, PayerType, payer_label, payer_options


def test_flow_type_values_and_labels():
    assert [member.value for member in FlowType] == ["income", "expense"]
    assert FlowType.INCOME.label == "Income"
    assert FlowType.EXPENSE.label == "Expense"


def test_payer_type_has_two_members():
    assert [member.value for member in PayerType] == ["person_a", "person_b"]


def test_payer_label_reads_the_given_mapping():
    labels = {"person_a": "Test A", "person_b": "Test B"}

    assert payer_label(PayerType.PERSON_A, labels) == "Test A"
    assert payer_label("person_b", labels) == "Test B"


def test_payer_label_falls_back_to_code():
    assert payer_label(PayerType.PERSON_B, {}) == "person_b"


def test_payer_options_lists_every_payer_in_order():
    options = payer_options({"person_a": "Alice", "person_b": "Bob"})

    assert options == [
        {"value": "person_a", "label": "Alice"},
        {"value": "person_b", "label": "Bob"},
    ]
