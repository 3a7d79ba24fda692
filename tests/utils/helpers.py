from typing import Any

import httpx


def create_auth_headers(token: str) -> dict[str, str]:
    """Create Authorization headers with Bearer token (service callers)."""
    return {"Authorization": f"Bearer {token}"}


def set_access_token_cookie(client: httpx.AsyncClient, access_token: str) -> None:
    """Set only the access token cookie on the test client."""
    client.cookies.set("access_token", access_token)


def order_payload(
    user_id: Any, course_id: Any, instructor_id: Any, **overrides: Any
) -> dict[str, Any]:
    """Camel-cased order creation body as sent by the checkout collaborator."""
    payload: dict[str, Any] = {
        "userId": str(user_id),
        "courseId": str(course_id),
        "instructorId": str(instructor_id),
        "amount": 100.0,
        "currency": "USD",
        "paymentMethod": "credit_card",
        "revenueSplit": {"platform": 20, "instructor": 80},
    }
    payload.update(overrides)
    return payload
