"""
Test suite for company data access and endpoints.

Tests cover:
- Creation and duplicates
- Filtered listing and its error policy
- Partial updates
- Admin-only writes
"""

import pytest

from jobly.core.errors import BadRequestError, EmptyResultError, InvalidInputError, InvalidRangeError, NotFoundError
from jobly.crud import company as company_crud
from jobly.models.company import Company
from jobly.schemas.company import CompanyCreateRequest, CompanyFilter


NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 50,
    "logoUrl": "http://new.img",
}


class TestCompanyCrud:
    """Tests for jobly.crud.company"""

    def test_create(self, db_session, seed_data):
        company = company_crud.create(db_session, CompanyCreateRequest(**NEW_COMPANY))

        assert company.handle == "new"
        assert company.num_employees == 50
        assert db_session.get(Company, "new") is not None

    def test_create_duplicate(self, db_session, seed_data):
        with pytest.raises(BadRequestError):
            company_crud.create(db_session, CompanyCreateRequest(**{**NEW_COMPANY, "handle": "c1"}))

    def test_find_matching_by_name(self, db_session, seed_data):
        rows = company_crud.find_matching(db_session, CompanyFilter(name="c1"))

        assert [row["handle"] for row in rows] == ["c1"]

    def test_find_matching_is_case_insensitive(self, db_session, seed_data):
        rows = company_crud.find_matching(db_session, CompanyFilter(name="C"))

        assert [row["handle"] for row in rows] == ["c1", "c2", "c3"]

    def test_find_matching_employee_range(self, db_session, seed_data):
        rows = company_crud.find_matching(db_session, CompanyFilter(min_employees=2, max_employees=3))

        assert [row["handle"] for row in rows] == ["c2", "c3"]

    def test_find_matching_all_criteria(self, db_session, seed_data):
        rows = company_crud.find_matching(
            db_session, CompanyFilter(name="2", min_employees=1, max_employees=2)
        )

        assert rows == [{
            "handle": "c2",
            "name": "C2",
            "description": "Desc2",
            "num_employees": 2,
            "logo_url": "http://c2.img",
        }]

    def test_find_matching_inverted_range(self, db_session, seed_data):
        with pytest.raises(InvalidRangeError):
            company_crud.find_matching(db_session, CompanyFilter(min_employees=3, max_employees=1))

    def test_find_matching_nothing_reports_min_bound_first(self, db_session, seed_data):
        with pytest.raises(EmptyResultError, match="at least 100 employees"):
            company_crud.find_matching(db_session, CompanyFilter(name="c1", min_employees=100))

    def test_find_matching_nothing_reports_name(self, db_session, seed_data):
        with pytest.raises(EmptyResultError, match="name: nope"):
            company_crud.find_matching(db_session, CompanyFilter(name="nope"))

    def test_update(self, db_session, seed_data):
        company = company_crud.update(db_session, "c1", {"name": "New", "numEmployees": 10})

        assert company == {
            "handle": "c1",
            "name": "New",
            "description": "Desc1",
            "num_employees": 10,
            "logo_url": "http://c1.img",
        }
        assert company_crud.get(db_session, "c1").num_employees == 10

    def test_update_null_field(self, db_session, seed_data):
        company = company_crud.update(db_session, "c1", {"numEmployees": None, "logoUrl": None})

        assert company["num_employees"] is None
        assert company["logo_url"] is None

    def test_update_not_found(self, db_session, seed_data):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "test"})

    def test_update_no_data(self, db_session, seed_data):
        with pytest.raises(InvalidInputError):
            company_crud.update(db_session, "c1", {})

    def test_update_duplicate_name(self, db_session, seed_data):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {"name": "C2"})

    def test_remove_cascades_to_jobs(self, db_session, seed_data):
        company_crud.remove(db_session, "c1")

        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "c1")

    def test_remove_not_found(self, db_session, seed_data):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")


class TestCompanyEndpoints:
    """Tests for /companies"""

    def test_create_as_admin(self, client, seed_data, admin_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == NEW_COMPANY

    def test_create_as_non_admin(self, client, seed_data, u1_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=u1_headers)
        assert response.status_code == 403

    def test_create_anonymous(self, client, seed_data):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY)
        assert response.status_code == 401

    def test_create_invalid(self, client, seed_data, admin_headers):
        response = client.post(
            "/api/v1/companies/",
            json={**NEW_COMPANY, "numEmployees": "not-a-number"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_list_all(self, client, seed_data):
        response = client.get("/api/v1/companies/")

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()] == ["c1", "c2", "c3"]

    def test_list_all_empty(self, client, db_session):
        response = client.get("/api/v1/companies/")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_filtered(self, client, seed_data):
        response = client.get("/api/v1/companies/?minEmployees=2&maxEmployees=2")

        assert response.status_code == 200
        assert response.json() == [{
            "handle": "c2",
            "name": "C2",
            "description": "Desc2",
            "numEmployees": 2,
            "logoUrl": "http://c2.img",
        }]

    def test_list_inverted_range(self, client, seed_data):
        response = client.get("/api/v1/companies/?minEmployees=3&maxEmployees=1")

        assert response.status_code == 400
        assert "cannot be greater" in response.json()["detail"]

    def test_list_no_match(self, client, seed_data):
        response = client.get("/api/v1/companies/?name=nope")
        assert response.status_code == 404

    def test_get_with_jobs(self, client, seed_data):
        response = client.get("/api/v1/companies/c1")

        assert response.status_code == 200
        data = response.json()
        assert data["handle"] == "c1"
        assert [j["title"] for j in data["jobs"]] == ["j1", "j2"]

    def test_get_not_found(self, client, seed_data):
        response = client.get("/api/v1/companies/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "No company: nope"

    def test_patch(self, client, seed_data, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={"name": "C1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "C1-new"
        assert response.json()["numEmployees"] == 1

    def test_patch_empty_body(self, client, seed_data, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No data"

    def test_patch_handle_not_allowed(self, client, seed_data, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={"handle": "c1-new"}, headers=admin_headers)
        assert response.status_code == 422

    def test_patch_as_non_admin(self, client, seed_data, u1_headers):
        response = client.patch("/api/v1/companies/c1", json={"name": "x"}, headers=u1_headers)
        assert response.status_code == 403

    def test_delete(self, client, seed_data, admin_headers):
        response = client.delete("/api/v1/companies/c1", headers=admin_headers)
        assert response.status_code == 204

        assert client.get("/api/v1/companies/c1").status_code == 404
        assert [j["title"] for j in client.get("/api/v1/jobs/").json()] == ["j3"]

    def test_delete_not_found(self, client, seed_data, admin_headers):
        response = client.delete("/api/v1/companies/nope", headers=admin_headers)
        assert response.status_code == 404
