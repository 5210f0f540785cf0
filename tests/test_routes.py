from datetime import timedelta

import pytest

from lcms_cleaning.validation import today_local


@pytest.fixture
def template_list_id(service, template_ids):
    return service.create_cleaning_task_template_list("Mondays AM", template_ids)


@pytest.fixture
def list_id(service, template_list_id):
    return service.create_cleaning_task_list(template_list_id, today_local())


class TestAuthentication:

    def test_no_token(self, client):
        response = client.get("/api/ui/cleaning-task-lists")

        assert response.status_code == 401
        assert response.json() == {"message": "User not authorised", "status_code": 401}

    def test_bad_token(self, client):
        response = client.get("/api/ui/cleaning-task-lists", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 403
        assert response.json() == {"message": "Authentication failed", "status_code": 403}

    def test_staff_member_on_manager_route(self, client, staff_member_headers):
        response = client.get("/api/ui/areas", headers=staff_member_headers)

        assert response.status_code == 403

    def test_staff_member_on_shared_route(self, client, staff_member_headers, list_id):
        response = client.get(f"/api/cleaning-task-lists/{list_id}", headers=staff_member_headers)

        assert response.status_code == 200
        assert response.json()["cleaning_task_list"]["date"] == today_local().isoformat()


class TestTemplateListRoutes:

    def test_create_and_view(self, client, manager_headers, template_ids):
        response = client.post(
            "/api/cleaning-task-template-lists",
            json={"title": "Mondays AM", "cleaning_task_templates": template_ids[:2]},
            headers=manager_headers
        )
        assert response.status_code == 200
        template_list_id = response.json()["cleaning_task_template_list_id"]

        response = client.get(f"/api/cleaning-task-template-lists/{template_list_id}", headers=manager_headers)
        assert response.json() == {
            "cleaning_task_template_list": {"cleaning_task_template_list_id": template_list_id, "title": "Mondays AM"}
        }

        response = client.get(f"/api/ui/cleaning-task-templates/{template_list_id}", headers=manager_headers)
        descriptions = [t["cleaning_task_template_description"] for t in response.json()["cleaning_task_templates"]]
        assert descriptions == ["Mop floors", "Wipe machines"]

    def test_missing_template_list(self, client, manager_headers):
        response = client.get("/api/cleaning-task-template-lists/42", headers=manager_headers)

        assert response.status_code == 404
        assert response.json() == {
            "message": "There are no cleaning task template lists with the id of 42",
            "status_code": 404,
        }

    def test_add_existing_template(self, client, manager_headers, template_list_id, service, template_ids):
        service.remove_cleaning_task_template_from_cleaning_task_template_list(template_list_id, template_ids[0])

        response = client.post(
            "/api/cleaning-task-template-lists/templates",
            json={"cleaning_task_template_list_id": template_list_id, "cleaning_task_template_id": template_ids[0]},
            headers=manager_headers
        )

        assert response.json() == {"response": "cleaning task template added successfully"}

    def test_add_new_template_ignores_empty_fields(self, client, manager_headers, template_list_id):
        response = client.post(
            "/api/cleaning-task-template-lists/templates",
            json={
                "cleaning_task_template_list_id": template_list_id,
                "cleaning_task_template_id": 0,
                "cleaning_task_template_description": "Skim pool",
                "area_id": 0,
                "area_description": "Pool Side",
            },
            headers=manager_headers
        )

        assert response.status_code == 200
        assert isinstance(response.json()["response"], int)

    def test_remove_template_and_delete_list(self, client, manager_headers, template_list_id, template_ids):
        response = client.delete(
            f"/api/cleaning-task-template-lists/{template_list_id}/templates/{template_ids[0]}",
            headers=manager_headers
        )
        assert response.json() == {"success_message": "removal successful"}

        response = client.delete(f"/api/cleaning-task-template-lists/{template_list_id}", headers=manager_headers)
        assert response.json() == {"success_message": "deletion successful"}

        response = client.delete(f"/api/cleaning-task-template-lists/{template_list_id}", headers=manager_headers)
        assert response.status_code == 404

    def test_create_template(self, client, manager_headers):
        response = client.post(
            "/api/cleaning-task-templates",
            json={"cleaning_task_template_description": "Clean benches", "area_description": "Sauna"},
            headers=manager_headers
        )
        assert response.json() == {"cleaning_task_template_id": 1}

        response = client.get("/api/ui/areas", headers=manager_headers)
        assert response.json() == {"areas": [{"area_id": 1, "area_description": "Sauna"}]}


class TestTaskListRoutes:

    def test_create(self, client, manager_headers, template_list_id):
        response = client.post(
            "/api/cleaning-task-lists",
            json={
                "cleaning_task_template_list_id": template_list_id,
                "date": (today_local() + timedelta(days=1)).isoformat(),
                "staff_member_id": 1001,
            },
            headers=manager_headers
        )
        assert response.status_code == 200
        list_id = response.json()["cleaning_task_list_id"]

        response = client.get(f"/api/ui/cleaning-tasks/{list_id}", headers=manager_headers)
        assert len(response.json()["cleaning_tasks"]) == 3

    def test_create_in_the_past(self, client, manager_headers, template_list_id):
        response = client.post(
            "/api/cleaning-task-lists",
            json={
                "cleaning_task_template_list_id": template_list_id,
                "date": (today_local() - timedelta(days=1)).isoformat(),
            },
            headers=manager_headers
        )

        assert response.status_code == 400
        assert response.json() == {"message": "date cannot be in the past", "status_code": 400}

    def test_malformed_body(self, client, manager_headers):
        response = client.post(
            "/api/cleaning-task-lists",
            json={"cleaning_task_template_list_id": "first", "date": "soon"},
            headers=manager_headers
        )

        assert response.status_code == 400
        assert response.json()["status_code"] == 400

    def test_non_integer_path_id(self, client, staff_member_headers):
        response = client.get("/api/cleaning-task-lists/abc", headers=staff_member_headers)

        assert response.status_code == 400

    def test_mark_complete_and_incomplete(self, client, staff_member_headers, list_id, service):
        task_id = service.get_cleaning_tasks(list_id)[0]["cleaning_task_id"]
        body = {"cleaning_task_list_id": list_id, "cleaning_task_id": task_id}

        response = client.patch("/api/cleaning-tasks/complete", json=body, headers=staff_member_headers)
        assert response.json() == {"success_message": "update successful"}

        response = client.patch("/api/cleaning-tasks/complete", json=body, headers=staff_member_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "The cleaning task is already completed"

        response = client.patch("/api/cleaning-tasks/incomplete", json=body, headers=staff_member_headers)
        assert response.json() == {"success_message": "update successful"}

    def test_sign_off(self, client, manager_headers, staff_member_headers, list_id):
        response = client.patch(
            "/api/cleaning-task-lists/sign-off/staff-member",
            json={"cleaning_task_list_id": list_id, "signature": "A. Smith"},
            headers=staff_member_headers
        )
        assert response.json() == {"success_message": "update successful"}

        response = client.patch(
            "/api/cleaning-task-lists/sign-off/manager",
            json={"cleaning_task_list_id": list_id, "signature": "J. Manager"},
            headers=staff_member_headers
        )
        assert response.status_code == 403

        response = client.patch(
            "/api/cleaning-task-lists/sign-off/manager",
            json={"cleaning_task_list_id": list_id, "signature": "J. Manager"},
            headers=manager_headers
        )
        assert response.json() == {"success_message": "update successful"}

        cleaning_task_list = client.get(f"/api/cleaning-task-lists/{list_id}", headers=manager_headers).json()
        assert cleaning_task_list["cleaning_task_list"]["manager_signature"] == "J. Manager"
        assert cleaning_task_list["cleaning_task_list"]["staff_member_signature"] == "A. Smith"

    def test_add_and_remove_task(self, client, manager_headers, list_id, areas):
        response = client.post(
            "/api/cleaning-tasks",
            json={"cleaning_task_list_id": list_id, "cleaning_task_description": "Clean mirrors",
                  "area_id": areas["Gym"], "area_description": ""},
            headers=manager_headers
        )
        assert response.status_code == 200
        task_id = response.json()["cleaning_task_id"]

        response = client.delete(f"/api/cleaning-tasks/{task_id}", headers=manager_headers)
        assert response.json() == {"success_message": "deletion successful"}

        response = client.delete(f"/api/cleaning-tasks/{task_id}", headers=manager_headers)
        assert response.status_code == 404

    def test_assign_staff_member_and_delete(self, client, manager_headers, list_id):
        response = client.patch(
            "/api/cleaning-task-lists/staff-member",
            json={"cleaning_task_list_id": list_id, "staff_member_id": 1002},
            headers=manager_headers
        )
        assert response.json() == {"success_message": "update successful"}

        response = client.get("/api/ui/cleaning-task-lists", headers=manager_headers)
        assert response.json()["cleaning_task_lists"][0]["staff_member_id"] == 1002

        response = client.delete(f"/api/cleaning-task-lists/{list_id}", headers=manager_headers)
        assert response.json() == {"success_message": "deletion successful"}


class TestUiRoutes:

    def test_staff_members(self, client, staff_member_headers):
        response = client.get("/api/ui/staff-members", headers=staff_member_headers)

        assert [s["payroll_number"] for s in response.json()["staff_members"]] == [1001, 1002, 1003]

    def test_empty_listing(self, client, manager_headers):
        response = client.get("/api/ui/cleaning-task-template-lists", headers=manager_headers)

        assert response.status_code == 404
        assert response.json() == {
            "message": "There are no cleaning task template lists stored in the system",
            "status_code": 404,
        }


class TestHealth:

    def test_up(self, client):
        assert client.get("/up").json() == {"status": "ok"}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_database_down(self, client, gateway, monkeypatch):
        monkeypatch.setattr(gateway, "check_connection", lambda: False)

        response = client.get("/health")

        assert response.status_code == 503
