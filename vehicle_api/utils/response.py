from vehicle_api.utils.timestamps import utcnow


def error_response(
    status: int,
    error: str,
    message: str,
    path: str,
    errors: list[str] | None = None,
) -> dict:
    return {
        "timestamp": utcnow().isoformat(),
        "status": status,
        "error": error,
        "message": message,
        "path": path,
        "errors": errors,
    }
