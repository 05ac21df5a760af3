from customer_api.models import Customer, validate_customer


def _fields(violations):
    return sorted(v["field"] for v in violations)


def test_valid_customer_has_no_violations(alice):
    assert validate_customer(alice) == []


def test_middle_name_is_optional():
    customer = Customer(first_name="Bob", last_name="Jones", email="bob@test.com", phone_number="4445556666")
    assert customer.middle_name is None
    assert validate_customer(customer) == []


def test_blank_required_fields_are_reported():
    customer = Customer(first_name=" ", last_name="", email="bob@test.com", phone_number="")
    assert _fields(validate_customer(customer)) == ["firstName", "lastName", "phoneNumber"]


def test_malformed_email_is_reported(alice):
    customer = alice.model_copy(update={"email": "not-an-email"})
    violations = validate_customer(customer)
    assert _fields(violations) == ["email"]
    assert "email" in violations[0]["message"]


def test_missing_attributes_are_reported():
    customer = Customer.model_construct(first_name="Bob")
    assert _fields(validate_customer(customer)) == ["email", "lastName", "phoneNumber"]


def test_camel_case_json_round_trip(alice):
    data = alice.model_dump(mode="json", by_alias=True)
    assert set(data) == {"id", "firstName", "middleName", "lastName", "email", "phoneNumber"}
    assert data["id"] == str(alice.id)
    assert Customer.model_validate(data) == alice


def test_accepts_attribute_names_as_input():
    customer = Customer.model_validate(
        {"first_name": "Bob", "last_name": "Jones", "email": "bob@test.com", "phone_number": "1"}
    )
    assert customer.first_name == "Bob"


def test_display_name_email_is_rejected(alice):
    customer = alice.model_copy(update={"email": "Bob <bob@test.com>"})
    assert _fields(validate_customer(customer)) == ["email"]


def test_padded_email_is_rejected(alice):
    customer = alice.model_copy(update={"email": "  bob@test.com  "})
    assert _fields(validate_customer(customer)) == ["email"]


def test_mixed_case_domain_is_accepted(alice):
    customer = alice.model_copy(update={"email": "Bob@Test.COM"})
    assert validate_customer(customer) == []
