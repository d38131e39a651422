from mailadmin_console.clients.http_client import APIError

UNAUTHORIZED_MESSAGE = "Unauthorized"


class ErrorMapper:
    _KNOWN_CODES = {
        "INVALID_CREDENTIALS": "Wrong password or invalid user",
        "CURRENT_PASSWORD_INVALID": "Current password invalid",
        "PASSWORD_POLICY": "Password must be between 12 and 1024 characters",
        "CONFLICT": "A record with this name already exists",
        "NOT_FOUND": "The record no longer exists",
        "VALIDATION_ERROR": "The request was rejected as invalid",
        "DB_UNAVAILABLE": "The database is unavailable, try again shortly",
        "TIMEOUT_ERROR": "The server took too long to respond",
        "NETWORK_ERROR": "Could not reach the admin API",
    }

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, APIError):
            if error.code == "UNAUTHORIZED" or (error.status_code in (401, 403) and error.code != "INVALID_CREDENTIALS"):
                return {
                    "code": "UNAUTHORIZED",
                    "message": UNAUTHORIZED_MESSAGE,
                    "details": None,
                    "trace_id": error.trace_id,
                }
            message = cls._KNOWN_CODES.get(error.code)
            if message is None:
                message = "Internal server error" if (error.status_code or 0) >= 500 else error.message
            return {
                "code": error.code,
                "message": message,
                "details": error.details,
                "trace_id": error.trace_id,
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "details": None,
            "trace_id": None,
        }

    @classmethod
    def to_display_message(cls, error: Exception) -> str:
        return cls.to_payload(error)["message"]
