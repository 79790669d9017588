class MissingParameterError(Exception):
    def __init__(self, missing: list[str]):
        self.missing = missing
        self.message = "Missing parameters. Needs: origin, nights, budget, type"
        super().__init__(f"{self.message} (missing: {', '.join(missing)})")


class InvalidParameterError(Exception):
    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        self.message = f"Invalid value for {name}: {value!r}"
        super().__init__(self.message)


class UnsupportedProfileError(Exception):
    def __init__(self, profile: str):
        self.profile = profile
        self.message = "Wrong type. Needs: balanced, luxury, affordable"
        super().__init__(f"{self.message} (got {profile!r})")


class UnsupportedOriginError(Exception):
    def __init__(self, origin: str, supported: list[str]):
        self.origin = origin
        self.message = f"Unsupported origin {origin!r}. Needs one of: {', '.join(supported)}"
        super().__init__(self.message)


class NoInventoryError(Exception):
    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"No {kind} inventory for {key}")


class InventoryProviderError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class WeightProfileError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"Rate limit exceeded for {service}")
