import pytest

from app.validators.product_request import ProductRequest, ProductUpdateRequest
from app.validators.user_request import validate_login, validate_register


VALID_PRODUCT = {"name": "Widget", "price": 9.99, "sku": "W-1", "category": "Tools"}


# --------------------------
# REGISTRATION / LOGIN
# --------------------------
def test_valid_registration_has_no_errors():
    assert validate_register({"username": "alice42", "password": "Secret1"}) == []


def test_registration_collects_every_rule():
    errors = validate_register({"username": "a!", "password": "abc"})
    assert errors == [
        "Username must only contain alphanumeric characters",
        "Username must be at least 3 characters long",
        "Password must be at least 6 characters long",
        "Password must contain at least one uppercase letter, one lowercase letter, and one number",
    ]


def test_registration_missing_fields():
    assert validate_register({}) == ["Username is required", "Password is required"]
    assert validate_register({"username": "", "password": None}) == [
        "Username is required",
        "Password is required",
    ]


def test_registration_username_too_long():
    errors = validate_register({"username": "a" * 31, "password": "Secret1"})
    assert errors == ["Username cannot exceed 30 characters"]


def test_registration_rejects_non_string_username():
    assert validate_register({"username": 12345, "password": "Secret1"}) == ["Username must be a string"]


def test_registration_email_is_optional_but_checked():
    assert validate_register({"username": "alice", "password": "Secret1", "email": None}) == []
    assert validate_register({"username": "alice", "password": "Secret1", "email": "nope"}) == [
        "Email must be a valid email address"
    ]


def test_login_only_checks_presence():
    assert validate_login({"username": "x", "password": "y"}) == []
    assert validate_login({"password": "y"}) == ["Username is required"]
    assert validate_login({}) == ["Username is required", "Password is required"]


# --------------------------
# PRODUCT CREATE
# --------------------------
def test_valid_product_has_no_errors():
    assert ProductRequest(VALID_PRODUCT).validate() == []


def test_missing_required_product_fields_listed_once_each():
    assert ProductRequest({}).validate() == [
        "Name is required",
        "Price is required",
        "SKU is required",
        "Category is required",
    ]


@pytest.mark.parametrize("missing", ["name", "price", "sku", "category"])
def test_each_required_field(missing):
    payload = {k: v for k, v in VALID_PRODUCT.items() if k != missing}
    errors = ProductRequest(payload).validate()
    assert len(errors) == 1
    assert errors[0].endswith("is required")


def test_product_errors_follow_fixed_order():
    payload = {
        "name": " x ",
        "price": -1,
        "sku": "   ",
        "category": "",
        "stock": 1.5,
        "weight": -2,
        "dimensions": {"length": -1, "width": "wide", "height": -3},
        "tags": "gaming",
    }
    assert ProductRequest(payload).validate() == [
        "Name must be at least 2 characters long",
        "Price must be a non-negative number",
        "SKU cannot be empty",
        "Category cannot be empty",
        "Stock must be a non-negative integer",
        "Weight must be a non-negative number",
        "Dimensions length must be a non-negative number",
        "Dimensions width must be a non-negative number",
        "Dimensions height must be a non-negative number",
        "Tags must be a list of strings",
    ]


def test_zero_price_and_numeric_strings_are_accepted():
    payload = dict(VALID_PRODUCT, price=0, stock="5", weight="1.25")
    request = ProductRequest(payload)
    assert request.validate() == []
    fields = request.to_fields()
    assert fields["price"] == 0.0
    assert fields["stock"] == 5
    assert fields["weight"] == 1.25


def test_numbers_must_fit_their_columns():
    payload = dict(VALID_PRODUCT, price=10 ** 8, stock=10 ** 20, weight=10 ** 6)
    assert ProductRequest(payload).validate() == [
        "Price must be less than 100000000",
        "Stock cannot exceed 2147483647",
        "Weight must be less than 1000000",
    ]


def test_largest_storable_numbers_are_accepted():
    payload = dict(VALID_PRODUCT, price="99999999.99", stock=2 ** 31 - 1, weight=999999.99)
    assert ProductRequest(payload).validate() == []


def test_booleans_are_not_numbers():
    errors = ProductRequest(dict(VALID_PRODUCT, price=True)).validate()
    assert errors == ["Price must be a non-negative number"]


def test_create_defaults_and_normalization():
    fields = ProductRequest(dict(VALID_PRODUCT, sku=" W-1 ", dimensions={"length": 2, "width": None})).to_fields()
    assert fields["sku"] == "W-1"
    assert fields["stock"] == 0
    assert fields["is_active"] is True
    assert fields["tags"] == []
    assert fields["dimensions"] == {"length": 2.0}


def test_dimensions_must_be_an_object():
    errors = ProductRequest(dict(VALID_PRODUCT, dimensions=[1, 2, 3])).validate()
    assert errors == ["Dimensions must be an object"]


# --------------------------
# PRODUCT UPDATE
# --------------------------
def test_empty_update_is_valid():
    assert ProductUpdateRequest({}).validate() == []
    assert ProductUpdateRequest({}).to_fields() == {}


def test_update_validates_only_supplied_fields():
    assert ProductUpdateRequest({"price": 12}).validate() == []
    assert ProductUpdateRequest({"sku": "", "stock": -4}).validate() == [
        "SKU cannot be empty",
        "Stock must be a non-negative integer",
    ]


def test_update_rejects_null_for_required_columns():
    assert ProductUpdateRequest({"name": None}).validate() == ["Name must be at least 2 characters long"]


def test_update_fields_have_no_defaults():
    fields = ProductUpdateRequest({"isActive": False, "tags": ["a"]}).to_fields()
    assert fields == {"is_active": False, "tags": ["a"]}


def test_update_checks_upper_bounds():
    assert ProductUpdateRequest({"stock": 2 ** 31}).validate() == ["Stock cannot exceed 2147483647"]
