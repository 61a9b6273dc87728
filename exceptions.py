from fastapi import status


class FitfolioError(Exception):
    """Base for errors that map onto a client-facing message and status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Something went wrong."

    def __init__(self, detail: str = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateEmail(FitfolioError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "User with this email already exists."


class InvalidCredentials(FitfolioError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password."


class Forbidden(FitfolioError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied."


class NotFoundOrNotOwned(FitfolioError):
    # Missing and foreign-owned rows share one message.
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found or you do not have permission to access it."


class ValidationError(FitfolioError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request."


class UpstreamParseFailure(FitfolioError):
    """Raised while reading EXIF data; recovered inside ``exif``."""

    detail = "Could not parse image metadata."
