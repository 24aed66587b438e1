"""
End-to-end tests through the HTTP API.
"""
from app.models.base.enums import UserRole, UserStatus
from app.services.complaint import WEEKLY_COMPLAINT_LIMIT
from tests.conftest import auth_headers_for

API = '/api/v1'


def _complaint_body(**fields):
    body = {'topic': 'Projector broken', 'description': 'Room 101 projector', 'course': 'CS'}
    body.update(fields)
    return body


class TestRegistrationFlow:
    """Register, get approved, log in"""

    def test_pending_until_approved(self, client, admin_headers):
        response = client.post(f'{API}/auth/register/student', json={
            'name': 'Asha Rao',
            'email': 'asha@college.edu',
            'password': 'pw-123456',
            'collegeId': 'COL-1',
            'course': 'CS',
        })
        assert response.status_code == 201
        user_id = response.json()['id']
        assert response.json()['status'] == 'pending'

        login = client.post(f'{API}/auth/login', json={'email': 'asha@college.edu', 'password': 'pw-123456'})
        assert login.status_code == 403
        assert login.json()['error']['code'] == 'PENDING_APPROVAL'

        pending = client.get(f'{API}/users/pending', headers=admin_headers)
        assert [u['id'] for u in pending.json()] == [user_id]

        approved = client.patch(f'{API}/users/{user_id}/approve', headers=admin_headers)
        assert approved.status_code == 200
        assert approved.json()['status'] == 'approved'

        login = client.post(f'{API}/auth/login', json={'email': 'ASHA@college.edu', 'password': 'pw-123456'})
        assert login.status_code == 200
        token = login.json()['token']

        me = client.get(f'{API}/auth/me', headers={'Authorization': f'Bearer {token}'})
        assert me.json()['email'] == 'asha@college.edu'
        assert 'password_hash' not in me.json()

    def test_duplicate_registration(self, client, student):
        response = client.post(f'{API}/auth/register/professor', json={
            'name': 'Someone',
            'email': student.email,
            'password': 'pw',
            'professorId': 'P-1',
            'department': 'CS',
        })

        assert response.status_code == 409
        assert response.json()['error']['code'] == 'CONFLICT'

    def test_invalid_credentials(self, client, student):
        response = client.post(f'{API}/auth/login', json={'email': student.email, 'password': 'wrong'})

        assert response.status_code == 401
        assert response.json()['error']['code'] == 'AUTHENTICATION_FAILED'

    def test_missing_token(self, client):
        assert client.get(f'{API}/complaints').status_code == 401

    def test_rejected_user_token_stops_working(self, client, student, student_headers, admin_headers):
        assert client.get(f'{API}/complaints', headers=student_headers).status_code == 200

        client.patch(f'{API}/users/{student.id}/reject', headers=admin_headers)

        response = client.get(f'{API}/complaints', headers=student_headers)
        assert response.status_code == 403
        assert response.json()['error']['code'] == 'PENDING_APPROVAL'

    def test_non_admin_cannot_list_users(self, client, professor_headers):
        assert client.get(f'{API}/users', headers=professor_headers).status_code == 403

    def test_list_users_filtered_by_status(self, client, make_user, admin_headers, student):
        rejected = make_user(UserRole.STUDENT, status=UserStatus.REJECTED)

        response = client.get(f'{API}/users', params={'status': 'rejected'}, headers=admin_headers)

        assert [u['id'] for u in response.json()] == [rejected.id]

    def test_list_users_filtered_by_role(self, client, admin_headers, student, professor):
        response = client.get(f'{API}/users', params={'role': 'professor'}, headers=admin_headers)

        assert [u['id'] for u in response.json()] == [professor.id]

    def test_user_stats(self, client, make_user, admin_headers, student, professor):
        make_user(UserRole.STUDENT, status=UserStatus.PENDING)

        response = client.get(f'{API}/users/stats', headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            'total_users': 4,
            'pending_approvals': 1,
            'students': 2,
            'professors': 1,
        }


class TestComplaintFlow:
    """Complaint lifecycle over HTTP"""

    def test_full_lifecycle(self, client, recorder, student, professor, admin, student_headers, professor_headers, admin_headers):
        created = client.post(f'{API}/complaints', json=_complaint_body(), headers=student_headers)
        assert created.status_code == 201
        complaint = created.json()
        assert complaint['status'] == 'submitted'
        assert complaint['assigned_professor_id'] == professor.id
        assert complaint['department'] == 'CS'

        listed = client.get(f'{API}/complaints', headers=professor_headers)
        assert [c['id'] for c in listed.json()] == [complaint['id']]

        reply = client.post(
            f"{API}/complaints/{complaint['id']}/replies",
            json={'message': 'Technician booked'},
            headers=professor_headers,
        )
        assert reply.status_code == 200
        assert reply.json()['replies'][0]['author_role'] == 'professor'

        solved = client.patch(
            f"{API}/complaints/{complaint['id']}/status",
            json={'status': 'solved'},
            headers=professor_headers,
        )
        assert solved.status_code == 200
        assert solved.json()['solved_by_professor_id'] == professor.id

        detail = client.get(f"{API}/complaints/{complaint['id']}", headers=student_headers)
        assert detail.json()['status'] == 'solved'
        assert len(detail.json()['replies']) == 1

        assert student.id in recorder.recipient_ids('complaint.status_changed')

    def test_professor_cannot_reject(self, client, student_headers, professor_headers):
        complaint = client.post(f'{API}/complaints', json=_complaint_body(), headers=student_headers).json()

        response = client.patch(
            f"{API}/complaints/{complaint['id']}/status",
            json={'status': 'rejected'},
            headers=professor_headers,
        )

        assert response.status_code == 403
        assert response.json()['error']['code'] == 'INSUFFICIENT_PERMISSIONS'

    def test_invalid_status_value(self, client, student_headers, admin_headers):
        complaint = client.post(f'{API}/complaints', json=_complaint_body(), headers=student_headers).json()

        response = client.patch(
            f"{API}/complaints/{complaint['id']}/status",
            json={'status': 'archived'},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_missing_fields_are_bad_requests(self, client, student_headers):
        response = client.post(f'{API}/complaints', json={'topic': 'x'}, headers=student_headers)

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    def test_unknown_complaint(self, client, admin_headers):
        response = client.get(f'{API}/complaints/does-not-exist', headers=admin_headers)

        assert response.status_code == 404

    def test_professor_complaint_list(self, client, student, professor, student_headers, professor_headers, admin_headers):
        created = client.post(f'{API}/complaints', json=_complaint_body(), headers=student_headers).json()

        own = client.get(f'{API}/complaints/professors/{professor.id}', headers=professor_headers)
        assert own.status_code == 200
        assert [c['id'] for c in own.json()] == [created['id']]
        assert own.json()[0]['student_id'] is None

        by_admin = client.get(f'{API}/complaints/professors/{professor.id}', headers=admin_headers)
        assert by_admin.json()[0]['student_id'] == student.id

        denied = client.get(f'{API}/complaints/professors/{professor.id}', headers=student_headers)
        assert denied.status_code == 403

    def test_assign(self, client, make_user, student_headers, admin_headers):
        other = make_user(UserRole.PROFESSOR, department='MATH')
        complaint = client.post(f'{API}/complaints', json=_complaint_body(), headers=student_headers).json()

        response = client.patch(
            f"{API}/complaints/{complaint['id']}/assign",
            json={'professorId': other.id},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()['assigned_professor_id'] == other.id
        assert response.json()['status'] == 'pending'

        visible = client.get(f'{API}/complaints', headers=auth_headers_for(other)).json()
        assert [c['id'] for c in visible] == [complaint['id']]


class TestQuotaFlow:
    """Weekly limit and the meeting-request path"""

    def test_eleventh_complaint_and_meeting_request(self, client, student, admin, student_headers, admin_headers):
        for i in range(WEEKLY_COMPLAINT_LIMIT):
            response = client.post(f'{API}/complaints', json=_complaint_body(topic=f'Issue {i}'), headers=student_headers)
            assert response.status_code == 201

        refused = client.post(f'{API}/complaints', json=_complaint_body(), headers=student_headers)
        assert refused.status_code == 429
        error = refused.json()['error']
        assert error['code'] == 'QUOTA_EXCEEDED'
        assert error['details'] == {'count': WEEKLY_COMPLAINT_LIMIT, 'limit': WEEKLY_COMPLAINT_LIMIT}

        quota = client.get(f'{API}/complaints/students/{student.id}/quota', headers=student_headers).json()
        assert quota['exceeded'] is True
        assert quota['remaining'] == 0

        count = client.get(f'{API}/complaints/students/{student.id}/weekly-count', headers=admin_headers).json()
        assert count['count'] == WEEKLY_COMPLAINT_LIMIT

        over = client.get(f'{API}/complaints/quota/exceeded', headers=admin_headers).json()
        assert [s['student_id'] for s in over] == [student.id]

        meeting = client.post(
            f'{API}/complaints',
            json=_complaint_body(
                topic='[MEETING REQUEST] Weekly limit reached',
                studentId=student.id,
                studentName=student.full_name,
                studentEmail=student.email,
            ),
            headers=admin_headers,
        )
        assert meeting.status_code == 201
        assert meeting.json()['is_meeting_request'] is True
        assert meeting.json()['assigned_admin_id'] == admin.id

        mine = client.get(f'{API}/complaints/students/{student.id}', headers=student_headers).json()
        assert len(mine) == WEEKLY_COMPLAINT_LIMIT + 1

    def test_student_cannot_read_other_quota(self, client, other_student, student_headers):
        response = client.get(f'{API}/complaints/students/{other_student.id}/quota', headers=student_headers)

        assert response.status_code == 403


class TestHealth:

    def test_health_and_request_id(self, client):
        response = client.get('/health', headers={'X-Request-ID': 'abc-123'})

        assert response.status_code == 200
        assert response.headers['X-Request-ID'] == 'abc-123'
        assert 'X-Process-Time' in response.headers

    def test_api_health(self, client):
        assert client.get(f'{API}/health').json()['status'] == 'healthy'
