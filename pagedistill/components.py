"""Component schema registry: the closed catalogue of distilled UI components.

Eleven component shapes, discriminated on ``type``.  Candidate values coming
back from the generation backend are validated here before anything is
returned to a caller.

Usage::

    from pagedistill.components import validate_result

    result = validate_result({"components": [{"type": "quote", "quote": "..."}]})
    payload = dump_result(result)

Field names are snake_case in Python and camelCase on the wire.  Every shape
rejects undeclared fields except ``profile.social``, which accepts arbitrary
extra string-valued links.  Optional fields may be absent but never ``null``:
they default to ``None`` without accepting it as input.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, NoReturn

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    Strict,
    StrictStr,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from pagedistill.errors import (
    MissingFieldError,
    OutputValidationError,
    TypeMismatchError,
    UnexpectedFieldError,
    UnknownVariantError,
)

logger = logging.getLogger(__name__)


def _number_out(value: float) -> int | float:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# Strict float accepts ints but not numeric strings, booleans or NaN/Infinity.
# Whole numbers go back out as ints, so ``"rank": 1`` round-trips unchanged.
Number = Annotated[
    float,
    Strict(),
    Field(allow_inf_nan=False),
    PlainSerializer(_number_out, when_used="json"),
]


class _Shape(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel)


# ---------------------------------------------------------------------------
# Nested shapes
# ---------------------------------------------------------------------------

class SpecItem(_Shape):
    key: StrictStr
    value: StrictStr


class Card(_Shape):
    title: StrictStr
    subtitle: StrictStr = None
    image: StrictStr = Field(None, description="Full card image URL for prominent visual cards")
    banner: StrictStr = Field(
        None, description="Small banner image URL from page for cards with a header image strip",
    )
    icon: StrictStr = Field(
        None, description="Icon name (e.g. 'chart', 'users', 'money', 'star') for icon-style cards",
    )
    rating: Number = None
    price: StrictStr = None
    pros: list[StrictStr] = None
    cons: list[StrictStr] = None
    summary: StrictStr = None
    specs: list[SpecItem] = None
    tags: list[StrictStr] = None


class TimelineItem(_Shape):
    date: StrictStr = None
    title: StrictStr
    description: StrictStr = None
    image: StrictStr = None
    icon: StrictStr = None


class ComparisonCategory(_Shape):
    name: StrictStr
    values: list[StrictStr]
    highlight: Number = None


class FaqItem(_Shape):
    question: StrictStr
    answer: StrictStr
    category: StrictStr = None


class StatItem(_Shape):
    value: StrictStr
    label: StrictStr
    trend: Literal["up", "down", "neutral", "warning"] = None
    icon: StrictStr = None
    context: StrictStr = None


class ChartData(_Shape):
    type: Literal["bar", "line", "pie"]
    title: StrictStr
    description: StrictStr = None


class HeroHighlight(_Shape):
    icon: StrictStr = None
    title: StrictStr
    description: StrictStr


class HeroCta(_Shape):
    text: StrictStr
    url: StrictStr


class ListItem(_Shape):
    rank: Number = None
    title: StrictStr
    description: StrictStr = None
    image: StrictStr = None
    tags: list[StrictStr] = None


class GalleryImage(_Shape):
    url: StrictStr
    caption: StrictStr = None
    credit: StrictStr = None
    tags: list[StrictStr] = None


class ProfileStat(_Shape):
    label: StrictStr
    value: StrictStr


class ProfileSocial(BaseModel):
    """Known social links plus any other network as an extra string field."""

    model_config = ConfigDict(extra="allow")

    twitter: StrictStr = None
    linkedin: StrictStr = None
    github: StrictStr = None
    website: StrictStr = None

    __pydantic_extra__: dict[str, StrictStr]


# ---------------------------------------------------------------------------
# Component shapes
# ---------------------------------------------------------------------------

class CardsComponent(_Shape):
    type: Literal["cards"]
    title: StrictStr
    description: StrictStr = None
    cards: list[Card]


class ArticleComponent(_Shape):
    type: Literal["article"]
    title: StrictStr
    subtitle: StrictStr = None
    author: StrictStr = None
    read_time: StrictStr = None
    hero_image: StrictStr = None
    content: StrictStr
    key_takeaways: list[StrictStr] = None


class TimelineComponent(_Shape):
    type: Literal["timeline"]
    title: StrictStr
    description: StrictStr = None
    orientation: Literal["vertical", "horizontal"] = None
    items: list[TimelineItem]


class ComparisonComponent(_Shape):
    type: Literal["comparison"]
    title: StrictStr
    description: StrictStr = None
    items: list[StrictStr]
    categories: list[ComparisonCategory]


class FaqComponent(_Shape):
    type: Literal["faq"]
    title: StrictStr
    description: StrictStr = None
    questions: list[FaqItem]


class StatsComponent(_Shape):
    type: Literal["stats"]
    title: StrictStr
    summary: StrictStr = None
    stats: list[StatItem]
    charts: list[ChartData] = None


class HeroComponent(_Shape):
    type: Literal["hero"]
    headline: StrictStr
    subheadline: StrictStr = None
    hero_image: StrictStr = None
    cta: HeroCta = None
    highlights: list[HeroHighlight] = None
    summary: StrictStr = None


class ListComponent(_Shape):
    type: Literal["list"]
    title: StrictStr
    description: StrictStr = None
    list_style: Literal["numbered", "bulleted", "featured"] = None
    items: list[ListItem]


class GalleryComponent(_Shape):
    type: Literal["gallery"]
    title: StrictStr
    description: StrictStr = None
    layout: Literal["grid", "masonry", "carousel"] = None
    images: list[GalleryImage]


class ProfileComponent(_Shape):
    type: Literal["profile"]
    name: StrictStr
    title: StrictStr = None
    image: StrictStr = None
    tagline: StrictStr = None
    bio: StrictStr = None
    stats: list[ProfileStat] = None
    highlights: list[StrictStr] = None
    social: ProfileSocial = None


class QuoteComponent(_Shape):
    type: Literal["quote"]
    quote: StrictStr
    author: StrictStr = None
    context: StrictStr = None
    image: StrictStr = None
    background_image: StrictStr = None
    related_content: StrictStr = None


COMPONENT_TYPES: dict[str, type[_Shape]] = {
    "cards": CardsComponent,
    "article": ArticleComponent,
    "timeline": TimelineComponent,
    "comparison": ComparisonComponent,
    "faq": FaqComponent,
    "stats": StatsComponent,
    "hero": HeroComponent,
    "list": ListComponent,
    "gallery": GalleryComponent,
    "profile": ProfileComponent,
    "quote": QuoteComponent,
}

DistilledComponent = Annotated[
    CardsComponent
    | ArticleComponent
    | TimelineComponent
    | ComparisonComponent
    | FaqComponent
    | StatsComponent
    | HeroComponent
    | ListComponent
    | GalleryComponent
    | ProfileComponent
    | QuoteComponent,
    Field(discriminator="type"),
]


class DistillationResult(BaseModel):
    """Validated backend output, rendered top to bottom in list order."""

    model_config = ConfigDict(extra="forbid")

    components: list[DistilledComponent] = Field(min_length=1)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_ERROR_CLASSES: dict[str, type[OutputValidationError]] = {
    "missing": MissingFieldError,
    "extra_forbidden": UnexpectedFieldError,
}


def _join(*parts: object) -> str:
    return ".".join(str(p) for p in parts if p != "")


def _diagnostic(path: str, kind: str, message: str) -> dict[str, str]:
    return {"path": path, "type": kind, "message": message}


def _raise_from(
    first_cls: type[OutputValidationError],
    diagnostics: list[dict[str, str]],
) -> NoReturn:
    first = diagnostics[0]
    raise first_cls(
        f"Invalid component at '{first['path']}': {first['message']}",
        path=first["path"],
        errors=diagnostics,
    )


def validate_component(value: Any, path: str = "") -> _Shape:
    """Validate one candidate component and return the matching model.

    Raises:
        UnknownVariantError:  ``type`` missing or not a known component
        MissingFieldError:    a required field is absent
        TypeMismatchError:    a field has the wrong type or enum value
        UnexpectedFieldError: an undeclared field is present
    """
    if not isinstance(value, dict):
        _raise_from(TypeMismatchError, [_diagnostic(path, "type_error", "component must be an object")])

    type_path = _join(path, "type")
    if "type" not in value:
        _raise_from(UnknownVariantError, [_diagnostic(type_path, "missing", "component type is missing")])
    tag = value["type"]
    if not isinstance(tag, str) or tag not in COMPONENT_TYPES:
        _raise_from(
            UnknownVariantError,
            [_diagnostic(type_path, "unknown_variant", f"unknown component type {tag!r}")],
        )

    model = COMPONENT_TYPES[tag]
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        diagnostics = [
            _diagnostic(_join(path, *err["loc"]), err["type"], err["msg"]) for err in errors
        ]
        first_cls = _ERROR_CLASSES.get(errors[0]["type"], TypeMismatchError)
        _raise_from(first_cls, diagnostics)


def validate_result(candidate: Any) -> DistillationResult:
    """Validate a whole candidate result, all or nothing.

    The candidate must be ``{"components": [...]}`` with at least one
    component.  Diagnostics from every failing component are reported
    together; the error class is that of the first failure.
    """
    if not isinstance(candidate, dict):
        _raise_from(TypeMismatchError, [_diagnostic("", "type_error", "result must be an object")])

    extra = sorted(str(k) for k in candidate if k != "components")
    if extra:
        _raise_from(
            UnexpectedFieldError,
            [_diagnostic(k, "extra_forbidden", "Extra inputs are not permitted") for k in extra],
        )
    if "components" not in candidate:
        _raise_from(MissingFieldError, [_diagnostic("components", "missing", "Field required")])

    raw = candidate["components"]
    if not isinstance(raw, list):
        _raise_from(TypeMismatchError, [_diagnostic("components", "list_type", "components must be a list")])
    if not raw:
        _raise_from(
            OutputValidationError,
            [_diagnostic("components", "too_short", "at least one component is required")],
        )

    components: list[_Shape] = []
    failures: list[OutputValidationError] = []
    for i, value in enumerate(raw):
        try:
            components.append(validate_component(value, path=_join("components", i)))
        except OutputValidationError as exc:
            failures.append(exc)

    if failures:
        logger.debug("%d of %d components failed validation", len(failures), len(raw))
        _raise_from(
            type(failures[0]),
            [diag for failure in failures for diag in failure.errors],
        )

    return DistillationResult(components=components)


def dump_result(result: DistillationResult) -> dict[str, Any]:
    """Serialize *result* with wire (camelCase) names, omitting absent fields."""
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)


def result_json_schema() -> dict[str, Any]:
    """JSON Schema of :class:`DistillationResult`, as shown to the backend."""
    return DistillationResult.model_json_schema(by_alias=True)
