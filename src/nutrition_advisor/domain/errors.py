"""Error taxonomy shared by services, adapters and the HTTP layer."""

UNAUTHORIZED = 401
RATE_LIMITED = 429


class NutritionAdvisorError(Exception):
    """Base class for expected application failures."""

    default_message = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(NutritionAdvisorError):
    """A request field is missing or malformed."""

    default_message = "Invalid request."


class InvalidImageFormat(InvalidInput):
    """The image is not a supported base64 data URI."""

    default_message = "Invalid image format. Expect data:image/jpeg;base64,..."


class ProfileIncomplete(NutritionAdvisorError):
    """The profile lacks the goal settings needed for advice."""

    default_message = "Profile is incomplete. Set target_type and daily_calorie_goal."


class ModelResponseInvalid(NutritionAdvisorError):
    """The provider returned content that is not valid JSON."""

    default_message = "Model returned invalid JSON."


class ProviderError(NutritionAdvisorError):
    """Base class for LLM provider failures."""

    default_message = "Recognition service is temporarily unavailable."

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ProviderNotConfigured(ProviderError):
    """No API key is available for the selected provider."""

    default_message = "AI provider is not configured."


class ProviderUnauthorized(ProviderError):
    """The provider rejected the API key."""

    default_message = "API key is invalid or unauthorized."


class ProviderRateLimited(ProviderError):
    """The provider quota or rate limit was hit."""

    default_message = "Quota exceeded or rate limit reached."


class ProviderUnavailable(ProviderError):
    """Any other provider failure."""


def provider_error_for_status(
    status_code: int | None, detail: str | None = None
) -> ProviderError:
    """Map a provider HTTP status to the matching error type."""
    if status_code == UNAUTHORIZED:
        return ProviderUnauthorized(status_code=status_code, detail=detail)
    if status_code == RATE_LIMITED:
        return ProviderRateLimited(status_code=status_code, detail=detail)
    return ProviderUnavailable(status_code=status_code, detail=detail)
