from tripfinder.exceptions.custom import (
    InvalidParameterError,
    MissingParameterError,
    UnsupportedOriginError,
    UnsupportedProfileError,
)
from tripfinder.schemas.inventory import Profile
from tripfinder.schemas.trip import SearchParams


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidParameterError(name, raw) from exc
    if value < 1:
        raise InvalidParameterError(name, raw)
    return value


def _parse_positive_number(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidParameterError(name, raw) from exc
    if not value > 0 or value == float("inf"):
        raise InvalidParameterError(name, raw)
    return value


def parse_search_params(
    origin: str | None,
    nights: str | None,
    budget: str | None,
    profile: str | None,
    cities: dict[str, str],
) -> SearchParams:
    """Validate raw request values into SearchParams.

    Missing values are reported before anything else, then the profile,
    then the origin, then the numeric fields.
    """
    raw = {"origin": origin, "nights": nights, "budget": budget, "type": profile}
    missing = [name for name, value in raw.items() if value is None or not str(value).strip()]
    if missing:
        raise MissingParameterError(missing)

    profile = profile.strip()
    if profile not in Profile.__members__:
        raise UnsupportedProfileError(profile)

    origin = origin.strip()
    if origin not in cities:
        raise UnsupportedOriginError(origin, list(cities))

    return SearchParams(
        origin=origin,
        origin_code=cities[origin],
        nights=_parse_positive_int("nights", nights.strip()),
        budget=_parse_positive_number("budget", budget.strip()),
        profile=Profile(profile),
    )
