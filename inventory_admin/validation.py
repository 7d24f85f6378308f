# inventory_admin/validation.py
"""
Validation entry point shared by the HTTP routes and the import script.

``validate`` never raises for bad input: it returns a ``ValidationResult``
carrying either the typed value or an ordered list of field issues, and
``format_errors`` groups those issues into ``{path: [messages...]}`` ready to
be shown next to each form field.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from inventory_admin.models import (
    CategoryCreate,
    CustomerCreate,
    EmployeeCreate,
    ItemCreate,
    LoginIn,
    PaymentAllocation,
    PaymentCreate,
    SalesLineItem,
    SalesRetailCreate,
    SalesWholesaleCreate,
    StockAdjustmentCreate,
    StockAdjustmentItem,
    StoreCreate,
    SupplierCreate,
)

T = TypeVar("T", bound=BaseModel)

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "login": LoginIn,
    "category": CategoryCreate,
    "store": StoreCreate,
    "item": ItemCreate,
    "customer": CustomerCreate,
    "supplier": SupplierCreate,
    "employee": EmployeeCreate,
    "sales_line_item": SalesLineItem,
    "sales_retail": SalesRetailCreate,
    "sales_wholesale": SalesWholesaleCreate,
    "payment": PaymentCreate,
    "payment_allocation": PaymentAllocation,
    "stock_adjustment_item": StockAdjustmentItem,
    "stock_adjustment": StockAdjustmentCreate,
}


@dataclass(frozen=True)
class FieldIssue:
    path: str
    message: str


@dataclass
class ValidationResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    issues: List[FieldIssue] = field(default_factory=list)

    @property
    def field_errors(self) -> Dict[str, List[str]]:
        return format_errors(self)


# ---- Messages ----

_NUMBER_ERRORS = {
    "float_type",
    "float_parsing",
    "decimal_type",
    "decimal_parsing",
    "finite_number",
}
_WHOLE_NUMBER_ERRORS = {"int_type", "int_parsing", "int_from_float", "int_parsing_size"}
_BOOL_ERRORS = {"bool_type", "bool_parsing"}
_UUID_ERRORS = {"uuid_type", "uuid_parsing", "uuid_version"}
_DATE_ERRORS = {
    "date_type",
    "date_parsing",
    "date_from_datetime_parsing",
    "date_from_datetime_inexact",
}


def humanize(name: str) -> str:
    words = ["ID" if word == "id" else word for word in name.split("_") if word]
    text = " ".join(words)
    return text[:1].upper() + text[1:]


def lower_first(text: str) -> str:
    # keeps acronyms such as "ID" intact
    return text[:1].lower() + text[1:]


def _label(schema: Optional[Type[BaseModel]], loc: Sequence[Any]) -> str:
    named = [part for part in loc if isinstance(part, str)]
    if not named:
        return "Value"
    if schema is not None and len(loc) == 1:
        info = schema.model_fields.get(loc[0])
        if info is not None and info.title:
            return info.title
    return humanize(named[-1])


def _message(schema: Optional[Type[BaseModel]], error: Dict[str, Any]) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    label = _label(schema, error.get("loc", ()))

    if kind in ("missing", "null_not_allowed"):
        return f"{label} is required"
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is required"
        return f"{label} must be at least {ctx.get('min_length')} characters"
    if kind == "string_too_long":
        return f"{label} must be at most {ctx.get('max_length')} characters"
    if kind == "string_pattern_mismatch":
        return f"Invalid {lower_first(label)}"
    if kind == "string_type":
        return f"{label} must be text"
    if kind == "too_short":
        if ctx.get("min_length") == 1:
            singular = lower_first(label)
            if singular.endswith("s"):
                singular = singular[:-1]
            return f"At least one {singular} is required"
        return f"{label} must contain at least {ctx.get('min_length')} entries"
    if kind == "list_type":
        return f"{label} must be a list"
    if kind == "greater_than_equal":
        if ctx.get("ge") == 0:
            return f"{label} cannot be negative"
        return f"{label} must be at least {ctx.get('ge')}"
    if kind == "greater_than":
        return f"{label} must be greater than {ctx.get('gt')}"
    if kind in _NUMBER_ERRORS:
        return f"{label} must be a number"
    if kind in _WHOLE_NUMBER_ERRORS:
        return f"{label} must be a whole number"
    if kind == "decimal_max_places":
        return f"{label} must have at most {ctx.get('decimal_places')} decimal places"
    if kind in ("decimal_max_digits", "decimal_whole_digits"):
        return f"{label} is too large"
    if kind in _BOOL_ERRORS:
        return f"{label} must be true or false"
    if kind == "enum":
        return f"{label} must be one of {ctx.get('expected')}"
    if kind in _UUID_ERRORS:
        return f"Invalid {lower_first(label)}"
    if kind in _DATE_ERRORS:
        return f"{label} must be a valid date"
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return "Expected an object"
    if kind == "value_error" and str(error.get("msg", "")).startswith(
        "value is not a valid email address"
    ):
        return "Invalid email address"
    if kind == "json_invalid":
        return "Malformed JSON body"

    # custom errors (e.g. "non_zero") already carry a readable message
    return str(error.get("msg", "Invalid value"))


def _path(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc)


def issues_from_errors(
    errors: Iterable[Dict[str, Any]],
    schema: Optional[Type[BaseModel]] = None,
    strip_prefix: Sequence[str] = (),
) -> List[FieldIssue]:
    """
    Convert pydantic error dicts into ``FieldIssue``s.

    ``strip_prefix`` drops leading location parts such as FastAPI's "body".
    """
    issues: List[FieldIssue] = []
    for error in errors:
        loc = list(error.get("loc", ()))
        while loc and strip_prefix and loc[0] in strip_prefix:
            loc.pop(0)
        error = dict(error, loc=tuple(loc))
        issues.append(FieldIssue(path=_path(loc), message=_message(schema, error)))
    return issues


# ---- Public API ----

def resolve_schema(schema: Union[str, Type[T]]) -> Type[T]:
    if isinstance(schema, str):
        try:
            return SCHEMAS[schema]
        except KeyError:
            raise KeyError(f"Unknown schema {schema!r}") from None
    return schema


def validate(schema: Union[str, Type[T]], data: Any) -> ValidationResult[T]:
    """
    Validate ``data`` against ``schema`` (a schema class or a registered name).

    Missing fields, wrong types, non-mapping input and extra keys all produce
    a result rather than an exception; extra keys are ignored.
    """
    model = resolve_schema(schema)
    try:
        value = model.model_validate(data)
    except ValidationError as exc:
        return ValidationResult(
            ok=False,
            issues=issues_from_errors(exc.errors(include_url=False), model),
        )
    return ValidationResult(ok=True, value=value)


def format_errors(
    result: Union[ValidationResult, Iterable[FieldIssue]],
) -> Dict[str, List[str]]:
    """Group issues by field path, keeping detection order."""
    issues = result.issues if isinstance(result, ValidationResult) else result
    errors: Dict[str, List[str]] = {}
    for issue in issues:
        errors.setdefault(issue.path, []).append(issue.message)
    return errors
