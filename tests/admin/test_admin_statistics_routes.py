from datetime import UTC, datetime

import pytest

from app.orders.models.order import OrderStatus, PaymentStatus
from tests.utils.factories import (
    create_course_factory,
    create_order_factory,
    create_review_factory,
)
from tests.utils.helpers import set_access_token_cookie

DASHBOARD = "/api/v1/admin/dashboard"


@pytest.fixture
def paid_order(db_session, test_user, test_instructor):
    course = create_course_factory(db_session, test_instructor, title="FastAPI in Depth")
    create_review_factory(db_session, course, test_user, 5)
    return create_order_factory(
        db_session,
        test_user,
        course,
        payment_status=PaymentStatus.COMPLETED,
        status=OrderStatus.COMPLETED,
        created_at=datetime(2025, 3, 10, tzinfo=UTC),
    )


class TestDashboardStatsRoute:
    @pytest.mark.asyncio
    async def test_should_return_summary_in_camel_case(
        self, test_client, test_admin_token, paid_order
    ):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["totalCourses"] == 1
        assert data["totalPurchases"] == 1
        assert data["totalRevenue"] == 20.0
        assert data["recentPurchases"][0]["orderId"] == paid_order.order_number
        assert data["recentPurchases"][0]["course"]["title"] == "FastAPI in Depth"
        assert data["stats"][-1] == {
            "title": "Platform Revenue",
            "value": 20.0,
            "icon": "money-bill-wave",
            "isMoney": True,
        }

    @pytest.mark.asyncio
    async def test_should_return_403_when_not_admin(self, test_client, test_user_token):
        set_access_token_cookie(test_client, test_user_token)

        response = await test_client.get(f"{DASHBOARD}/stats")

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_should_return_401_without_token(self, test_client):
        response = await test_client.get(f"{DASHBOARD}/stats")

        assert response.status_code == 401


class TestTrendRoutes:
    @pytest.mark.asyncio
    async def test_enrollment_trends_for_year(self, test_client, test_admin_token, paid_order):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/enrollment-trends", params={"year": 2025})

        assert response.status_code == 200
        chart = response.json()["data"]
        assert len(chart["labels"]) == 12
        dataset = chart["datasets"][0]
        assert dataset["label"] == "Course Enrollments"
        assert dataset["borderColor"] == "#5F2DED"
        assert dataset["data"] == [0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0]

    @pytest.mark.asyncio
    async def test_revenue_trends_for_year(self, test_client, test_admin_token, paid_order):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/revenue", params={"year": 2025})

        assert response.status_code == 200
        dataset = response.json()["data"]["datasets"][0]
        assert dataset["label"] == "Platform Revenue"
        assert dataset["fill"] is True
        assert dataset["data"][2] == 20.0
        assert sum(dataset["data"]) == 20.0

    @pytest.mark.asyncio
    async def test_year_defaults_to_current_year(self, test_client, test_admin_token, paid_order):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/enrollment-trends")

        assert response.status_code == 200
        assert len(response.json()["data"]["datasets"][0]["data"]) == 12

    @pytest.mark.asyncio
    async def test_failed_aggregation_returns_generic_500(self, test_client, test_admin_token):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/revenue", params={"year": 9999})

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "STATISTICS_ERROR"
        assert error["message"] == "Failed to fetch dashboard statistics"


class TestRankingRoutes:
    @pytest.mark.asyncio
    async def test_course_distribution(self, test_client, test_admin_token, paid_order):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/course-distribution")

        assert response.status_code == 200
        chart = response.json()["data"]
        assert chart["labels"] == ["Development"]
        assert chart["datasets"][0]["data"] == [1]

    @pytest.mark.asyncio
    async def test_top_instructors(
        self, test_client, test_admin_token, test_instructor, paid_order
    ):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/top-instructors")

        assert response.status_code == 200
        [ranked] = response.json()["data"]
        assert ranked["id"] == str(test_instructor.id)
        assert ranked["studentCount"] == 1
        assert ranked["courseCount"] == 1
        assert ranked["reviewCount"] == 1
        assert ranked["averageRating"] == 5.0

    @pytest.mark.asyncio
    async def test_courses_state(self, test_client, test_admin_token, paid_order):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/courses-state")

        assert response.status_code == 200
        [state] = response.json()["data"]
        assert state["title"] == "FastAPI in Depth"
        assert state["enrolled"] == 1
        assert state["averageRating"] == 5.0


class TestCatalogRoutes:
    @pytest.mark.asyncio
    async def test_recent_courses(self, test_client, test_admin_token, test_instructor, paid_order):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/courses/recent", params={"limit": 4})

        assert response.status_code == 200
        [course] = response.json()["data"]
        assert course["title"] == "FastAPI in Depth"
        assert course["instructor"]["name"] == test_instructor.full_name

    @pytest.mark.asyncio
    async def test_all_courses_rate_unreviewed_course_zero(
        self, test_client, test_admin_token, db_session, test_instructor, paid_order
    ):
        create_course_factory(db_session, test_instructor, title="Brand New")
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/courses")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["total"] == 2
        by_title = {course["title"]: course for course in body["data"]}
        assert by_title["Brand New"]["totalReviews"] == 0
        assert by_title["Brand New"]["averageRating"] == 0
        assert by_title["FastAPI in Depth"]["totalReviews"] == 1
        assert by_title["FastAPI in Depth"]["averageRating"] == 5.0
        assert by_title["FastAPI in Depth"]["price"] == 100.0

    @pytest.mark.asyncio
    async def test_users_filtered_by_role(
        self, test_client, test_admin_token, test_user, test_instructor
    ):
        set_access_token_cookie(test_client, test_admin_token)

        response = await test_client.get(f"{DASHBOARD}/users", params={"role": "instructor"})

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["total"] == 1
        assert body["data"][0]["email"] == "instructor@example.com"
        assert body["data"][0]["role"] == "instructor"
        assert body["data"][0]["firstName"] == test_instructor.first_name

    @pytest.mark.asyncio
    async def test_users_require_admin(self, test_client, test_user_token):
        set_access_token_cookie(test_client, test_user_token)

        response = await test_client.get(f"{DASHBOARD}/users")

        assert response.status_code == 403
