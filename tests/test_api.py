from fastapi.testclient import TestClient


NEW_TEACHER = {
    "username": "t1",
    "password": "x",
    "email": "t1@a.com",
    "role": "teacher",
    "fullName": "T One",
}


def create_user(client: TestClient, **overrides):
    response = client.post("/api/users", json={**NEW_TEACHER, **overrides})
    assert response.status_code == 200, response.text
    return response.json()


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# === 用户 ===

def test_create_user_strips_password_and_has_no_classes(client: TestClient):
    user = create_user(client)
    assert user["id"]
    assert user["username"] == "t1"
    assert user["fullName"] == "T One"
    assert user["role"] == "teacher"
    assert "createdAt" in user
    assert "password" not in user

    response = client.get(f"/api/classes/teacher/{user['id']}")
    assert response.status_code == 200
    assert response.json() == []


def test_list_users_never_contains_password(client: TestClient):
    create_user(client)
    response = client.get("/api/users")
    assert response.status_code == 200
    users = response.json()
    assert len(users) == 4
    assert all("password" not in u for u in users)


def test_list_users_by_role(client: TestClient):
    response = client.get("/api/users", params={"role": "student"})
    assert [u["username"] for u in response.json()] == ["student1"]


def test_get_user(client: TestClient):
    user = create_user(client)
    response = client.get(f"/api/users/{user['id']}")
    assert response.status_code == 200
    assert response.json() == user

    missing = client.get("/api/users/nope")
    assert missing.status_code == 404
    assert missing.json() == {"message": "User not found"}


def test_create_user_validation_errors(client: TestClient):
    missing_role = {k: v for k, v in NEW_TEACHER.items() if k != "role"}
    response = client.post("/api/users", json=missing_role)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request body"

    response = client.post("/api/users", json={**NEW_TEACHER, "role": "principal"})
    assert response.status_code == 400

    # 校验失败不会写入任何数据
    assert len(client.get("/api/users").json()) == 3


def test_duplicate_username_and_email_rejected(client: TestClient):
    create_user(client)
    response = client.post("/api/users", json={**NEW_TEACHER, "email": "other@a.com"})
    assert response.status_code == 400
    assert response.json() == {"message": "Username already exists"}

    response = client.post("/api/users", json={**NEW_TEACHER, "username": "t2"})
    assert response.status_code == 400
    assert response.json() == {"message": "Email already exists"}


def test_update_user(client: TestClient):
    user = create_user(client)

    response = client.put(f"/api/users/{user['id']}", json={})
    assert response.status_code == 200
    assert response.json() == user

    response = client.put(f"/api/users/{user['id']}", json={"fullName": "Teacher One"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["fullName"] == "Teacher One"
    assert updated["email"] == user["email"]
    assert updated["createdAt"] == user["createdAt"]
    assert "password" not in updated


def test_update_user_errors(client: TestClient):
    user = create_user(client)
    response = client.put("/api/users/nope", json={"fullName": "X"})
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}

    response = client.put(f"/api/users/{user['id']}", json={"role": "principal"})
    assert response.status_code == 400

    response = client.put(f"/api/users/{user['id']}", json={"username": None})
    assert response.status_code == 400

    response = client.put(f"/api/users/{user['id']}", json={"username": "admin"})
    assert response.status_code == 400
    assert response.json() == {"message": "Username already exists"}


def test_password_change_takes_effect_on_login(client: TestClient):
    user = create_user(client)
    client.put(f"/api/users/{user['id']}", json={"password": "new-secret"})

    old = client.post("/api/auth/login", json={"username": "t1", "password": "x"})
    assert old.status_code == 401
    new = client.post("/api/auth/login", json={"username": "t1", "password": "new-secret"})
    assert new.status_code == 200


def test_delete_user(client: TestClient):
    user = create_user(client)
    response = client.delete(f"/api/users/{user['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}

    response = client.delete(f"/api/users/{user['id']}")
    assert response.status_code == 404


# === 登录 ===

def test_login_seeded_user(client: TestClient):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["username"] == "admin"
    assert user["role"] == "admin"
    assert "password" not in user


def test_login_wrong_password(client: TestClient):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_login_unknown_user(client: TestClient):
    response = client.post("/api/auth/login", json={"username": "ghost", "password": "admin123"})
    assert response.status_code == 401


def test_login_unknown_user_still_verifies_a_hash(client: TestClient, monkeypatch):
    from smartpaper.api import auth

    calls = []
    real_verify = auth.verify_password

    def counting_verify(plain, stored):
        calls.append(stored)
        return real_verify(plain, stored)

    monkeypatch.setattr(auth, "verify_password", counting_verify)
    response = client.post("/api/auth/login", json={"username": "ghost", "password": "admin123"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}
    assert len(calls) == 1
    assert calls[0].startswith("pbkdf2_sha256$1000$")


def test_login_created_user(client: TestClient):
    create_user(client)
    response = client.post("/api/auth/login", json={"username": "t1", "password": "x"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "t1@a.com"


# === 班级与试卷 ===

def test_class_crud(client: TestClient, seeded_ids):
    response = client.post(
        "/api/classes",
        json={"name": "Physics 10-B", "teacherId": seeded_ids["teacher"], "subject": "Physics"},
    )
    assert response.status_code == 200
    created = response.json()
    assert created["teacherId"] == seeded_ids["teacher"]

    classes = client.get(f"/api/classes/teacher/{seeded_ids['teacher']}").json()
    assert {c["name"] for c in classes} == {"Mathematics 9-A", "Physics 10-B"}
    assert len(client.get("/api/classes").json()) == 2

    response = client.put(f"/api/classes/{created['id']}", json={"name": "Physics 10-C"})
    assert response.json()["name"] == "Physics 10-C"
    assert response.json()["subject"] == "Physics"

    assert client.delete(f"/api/classes/{created['id']}").status_code == 200
    assert client.get(f"/api/classes/{created['id']}").status_code == 404


def test_create_class_requires_name(client: TestClient):
    response = client.post("/api/classes", json={"subject": "Physics"})
    assert response.status_code == 400


def test_paper_with_unknown_class_is_accepted(client: TestClient, seeded_ids):
    payload = {
        "title": "Mock Test",
        "subject": "Mathematics",
        "classId": "does-not-exist",
        "teacherId": seeded_ids["teacher"],
        "content": {"sections": [{"name": "A", "questions": []}]},
        "totalMarks": 50,
    }
    response = client.post("/api/papers", json=payload)
    assert response.status_code == 200
    paper = response.json()
    assert paper["classId"] == "does-not-exist"
    assert paper["content"] == payload["content"]

    papers = client.get(f"/api/papers/teacher/{seeded_ids['teacher']}").json()
    assert {p["title"] for p in papers} == {"Algebra Quiz - Chapter 3", "Mock Test"}
    assert client.get("/api/papers/teacher/unknown").json() == []
    assert client.get("/api/papers/class/does-not-exist").json() == [paper]


def test_paper_total_marks_must_be_non_negative(client: TestClient):
    response = client.post(
        "/api/papers", json={"title": "T", "subject": "S", "totalMarks": -1}
    )
    assert response.status_code == 400


def test_paper_update_and_delete(client: TestClient, seeded_ids):
    paper_id = seeded_ids["paper"]
    response = client.put(f"/api/papers/{paper_id}", json={"totalMarks": 30})
    assert response.status_code == 200
    assert response.json()["totalMarks"] == 30
    assert response.json()["title"] == "Algebra Quiz - Chapter 3"

    assert client.put("/api/papers/nope", json={"totalMarks": 30}).status_code == 404
    assert client.delete(f"/api/papers/{paper_id}").status_code == 200
    assert client.get(f"/api/papers/{paper_id}").json() == {"message": "Paper not found"}


# === 提交与成绩 ===

def test_submission_and_grading_flow(client: TestClient, seeded_ids):
    response = client.post(
        "/api/submissions",
        json={
            "paperId": seeded_ids["paper"],
            "studentId": seeded_ids["student"],
            "content": {"answers": ["x=2", "x=7"]},
            "filesUploaded": ["uploads/page-1.png"],
            "isGraded": True,
        },
    )
    assert response.status_code == 200
    submission = response.json()
    assert submission["isGraded"] is False
    assert submission["filesUploaded"] == ["uploads/page-1.png"]
    assert "submittedAt" in submission

    by_student = client.get(f"/api/submissions/student/{seeded_ids['student']}").json()
    by_paper = client.get(f"/api/submissions/paper/{seeded_ids['paper']}").json()
    assert by_student == by_paper == [submission]

    response = client.post(
        "/api/grades",
        json={
            "submissionId": submission["id"],
            "studentId": seeded_ids["student"],
            "paperId": seeded_ids["paper"],
            "score": 22,
            "totalMarks": 25,
            "feedback": "Good work",
        },
    )
    assert response.status_code == 200
    grade = response.json()
    assert grade["score"] == 22
    assert "gradedAt" in grade

    # 创建成绩不会自动标记提交
    assert client.get(f"/api/submissions/{submission['id']}").json()["isGraded"] is False

    response = client.post(f"/api/submissions/{submission['id']}/mark-graded")
    assert response.status_code == 200
    assert response.json()["isGraded"] is True

    assert client.get(f"/api/grades/student/{seeded_ids['student']}").json() == [grade]
    assert client.get(f"/api/grades/paper/{seeded_ids['paper']}").json() == [grade]
    assert client.get(f"/api/grades/submission/{submission['id']}").json() == [grade]
    assert client.get("/api/grades/student/unknown").json() == []


def test_mark_graded_unknown_submission(client: TestClient):
    response = client.post("/api/submissions/nope/mark-graded")
    assert response.status_code == 404
    assert response.json() == {"message": "Submission not found"}


def test_update_submission(client: TestClient):
    submission = client.post("/api/submissions", json={"paperId": "p"}).json()
    response = client.put(
        f"/api/submissions/{submission['id']}", json={"filesUploaded": ["a.pdf", "b.pdf"]}
    )
    assert response.status_code == 200
    assert response.json()["filesUploaded"] == ["a.pdf", "b.pdf"]
    assert response.json()["submittedAt"] == submission["submittedAt"]


def test_grade_requires_score(client: TestClient):
    response = client.post("/api/grades", json={"totalMarks": 25})
    assert response.status_code == 400


def test_update_grade(client: TestClient):
    grade = client.post("/api/grades", json={"score": 10, "totalMarks": 20}).json()
    response = client.put(f"/api/grades/{grade['id']}", json={"feedback": "Re-marked", "score": 12})
    assert response.status_code == 200
    assert response.json()["score"] == 12
    assert response.json()["totalMarks"] == 20
    assert client.get("/api/grades/nope").status_code == 404


# === 学习资料 ===

def test_study_materials(client: TestClient, seeded_ids):
    assert client.get("/api/study-materials").json() == []

    response = client.post(
        "/api/study-materials",
        json={
            "title": "Linear equations",
            "subject": "Mathematics",
            "content": "Isolate the variable.",
            "uploadedBy": seeded_ids["teacher"],
        },
    )
    assert response.status_code == 200
    material = response.json()
    assert material["uploadedBy"] == seeded_ids["teacher"]

    assert client.get("/api/study-materials").json() == [material]
    assert client.get("/api/study-materials/subject/Mathematics").json() == [material]
    assert client.get("/api/study-materials/subject/History").json() == []

    response = client.put(f"/api/study-materials/{material['id']}", json={"title": "Equations"})
    assert response.json()["title"] == "Equations"
    assert client.delete(f"/api/study-materials/{material['id']}").status_code == 200
    assert client.delete(f"/api/study-materials/{material['id']}").status_code == 404


def test_study_material_requires_title(client: TestClient):
    response = client.post("/api/study-materials", json={"subject": "Mathematics"})
    assert response.status_code == 400


# === 管理统计 ===

def test_admin_stats(client: TestClient):
    response = client.get("/api/admin/stats")
    assert response.status_code == 200
    assert response.json() == {
        "totalUsers": 3,
        "activeTeachers": 1,
        "totalStudents": 1,
        "totalClasses": 1,
        "papersGenerated": None,
        "submissionsGraded": None,
    }


def test_admin_stats_recomputed_each_request(client: TestClient):
    create_user(client)
    create_user(client, username="s2", email="s2@a.com", role="student")
    client.post("/api/classes", json={"name": "B", "subject": "Physics"})

    stats = client.get("/api/admin/stats").json()
    assert stats["totalUsers"] == 5
    assert stats["activeTeachers"] == 2
    assert stats["totalStudents"] == 2
    assert stats["totalClasses"] == 2
