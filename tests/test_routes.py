"""HTTP API"""
from timetable.core.db_manager import db
from timetable.models.schedule import ScheduleChange
from tests.conftest import FIXED_NOW


def test_login_failure(client, seed):
    response = client.post('/api/auth/login', json={'email': 'admin@example.com', 'password': 'wrong'})

    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'error': 'Неверный email или пароль'}


def test_protected_route_requires_login(client, seed):
    response = client.get('/api/schedule')

    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_me_and_logout(student_client):
    me = student_client.get('/api/auth/me').get_json()
    assert me['user']['email'] == 'student@example.com'
    assert me['user']['group'] == 'ИВТ-21'

    assert student_client.post('/api/auth/logout').status_code == 200
    assert student_client.get('/api/auth/me').status_code == 401


def test_register_student(client, seed):
    response = client.post('/api/auth/register', json={
        'email': 'New@Example.com', 'password': 'pass', 'group_name': 'ИВТ-22'
    })
    assert response.status_code == 201

    duplicate = client.post('/api/auth/register', json={
        'email': 'new@example.com', 'password': 'pass', 'group_name': 'ИВТ-22'
    })
    assert duplicate.status_code == 409

    unknown_group = client.post('/api/auth/register', json={
        'email': 'other@example.com', 'password': 'pass', 'groupName': 'Нет такой'
    })
    assert unknown_group.status_code == 404


def test_week_schedule_for_student(student_client):
    body = student_client.get('/api/schedule?weekOffset=-1').get_json()

    assert body['weekNumber'] == 6
    assert body['weekStart'] == '2026-10-12'
    assert body['group'] == 'ИВТ-21'
    assert body['lessons'] == []


def test_week_offset_must_be_integer(student_client):
    response = student_client.get('/api/schedule?weekOffset=abc')
    assert response.status_code == 400


def test_week_offset_out_of_range(admin_client):
    response = admin_client.get('/api/schedule?group=ИВТ-21&weekOffset=999999999')

    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_put_day_schedule(admin_client, seed):
    payload = {
        'date': '2026-10-21',
        'groupId': seed.group_id,
        'lessons': [{'start_time': '08:30', 'end_time': '10:00', 'subject': 'Математика',
                     'room': '101', 'type': 'lecture', 'teacher_id': seed.teacher_id}]
    }

    response = admin_client.put('/api/schedule/day', json=payload)

    assert response.status_code == 200
    assert response.get_json()['success'] is True
    day = admin_client.get(f'/api/schedule/day?date=2026-10-21&groupId={seed.group_id}').get_json()
    assert [l['subject'] for l in day['lessons']] == ['Математика']


def test_put_day_schedule_past_date(admin_client, seed):
    response = admin_client.put('/api/schedule/day', json={
        'date': FIXED_NOW.date().replace(day=18).isoformat(), 'groupId': seed.group_id, 'lessons': []
    })

    assert response.status_code == 400
    assert response.get_json() == {'success': False, 'error': 'Нельзя редактировать расписание прошедших дат'}


def test_put_day_schedule_forbidden_for_teacher(teacher_client, seed):
    response = teacher_client.put('/api/schedule/day', json={
        'date': '2026-10-21', 'groupId': seed.group_id, 'lessons': []
    })
    assert response.status_code == 403


def test_admin_routes_forbidden_for_student(student_client):
    assert student_client.get('/api/admin/changes').status_code == 403
    assert student_client.post('/api/admin/groups', json={'name': 'X'}).status_code == 403


def test_group_crud(admin_client, app):
    created = admin_client.post('/api/admin/groups', json={'name': '  ПИ-31 '})
    assert created.status_code == 201
    group_id = created.get_json()['id']
    assert created.get_json()['name'] == 'ПИ-31'

    assert admin_client.post('/api/admin/groups', json={'name': 'ПИ-31'}).status_code == 409
    assert 'ПИ-31' in [g['name'] for g in admin_client.get('/api/groups').get_json()]

    assert admin_client.delete(f'/api/admin/groups/{group_id}').status_code == 200
    assert admin_client.delete(f'/api/admin/groups/{group_id}').status_code == 404

    actions = [c['action_type'] for c in admin_client.get('/api/admin/changes').get_json()]
    assert actions == ['delete_group', 'create_group']


def test_delete_group_cascades_to_lessons(admin_client, app, seed):
    admin_client.post('/api/admin/lessons', json={
        'group_id': seed.group_id, 'single_date': '2026-11-02', 'start_time': '08:30',
        'end_time': '10:00', 'subject': 'Математика', 'room': '101', 'type': 'lecture'
    })

    assert admin_client.delete(f'/api/admin/groups/{seed.group_id}').status_code == 200
    assert admin_client.get('/api/admin/lessons').get_json() == []


def test_lesson_and_bulk_routes(admin_client, seed):
    created = admin_client.post('/api/admin/lessons', json={
        'group_id': seed.group_id, 'day': 0, 'week': 2, 'start_time': '08:30',
        'end_time': '10:00', 'subject': 'Математика', 'room': '101', 'type': 'lecture'
    })
    assert created.status_code == 201
    assert len(created.get_json()['ids']) == 8

    template = admin_client.post('/api/admin/templates', json={
        'group_id': seed.group_id, 'day': 0, 'week': 2, 'start_time': '08:30',
        'end_time': '10:00', 'subject': 'Математика', 'room': '101', 'type': 'lecture',
        'teacher': 'Иванов И.И.'
    })
    assert template.status_code == 201

    copied = admin_client.post('/api/admin/lessons/copy-week',
                               json={'group_id': seed.group_id, 'from_week': 2, 'to_week': 1})
    assert copied.get_json()['count'] == 1

    replaced = admin_client.patch('/api/admin/lessons/replace-teacher', json={
        'group_id': seed.group_id, 'old_teacher': 'Иванов И.И.', 'new_teacher': 'Петров П.П.'
    })
    assert replaced.get_json()['count'] == 2

    cleared = admin_client.delete('/api/admin/lessons/clear-week', json={'group_id': seed.group_id, 'week': 1})
    assert cleared.get_json()['count'] == 1

    missing = admin_client.post('/api/admin/lessons/copy-week',
                                json={'group_id': seed.group_id, 'from_week': 1, 'to_week': 2})
    assert missing.status_code == 404
    assert missing.get_json() == {'success': False, 'error': 'Нет занятий для копирования'}


def test_change_history_limit(admin_client, app):
    for name in ('A', 'B', 'C'):
        admin_client.post('/api/admin/groups', json={'name': name})

    history = admin_client.get('/api/admin/changes?limit=2&offset=1').get_json()
    assert [c['new_value']['name'] for c in history] == ['B', 'A']
    assert admin_client.get('/api/admin/changes?limit=-1').status_code == 400


def test_teacher_accounts(admin_client, app):
    created = admin_client.post('/api/admin/teachers', json={
        'email': 'sidorov@example.com', 'password': 'pass', 'full_name': 'Сидоров С.С.'
    })
    assert created.status_code == 201
    duplicate = admin_client.post('/api/admin/teachers', json={
        'email': 'sidorov@example.com', 'password': 'pass', 'full_name': 'Сидоров С.С.'
    })
    assert duplicate.status_code == 409

    names = [t['full_name'] for t in admin_client.get('/api/admin/teachers').get_json()]
    assert names == ['Иванов И.И.', 'Петров П.П.', 'Сидоров С.С.']


def test_teacher_schedule(teacher_client, seed, app):
    assert teacher_client.get('/api/teacher/schedule').get_json() == []


def test_unexpected_error_is_generic(admin_client, app, monkeypatch):
    from timetable.routes import admin as admin_routes

    def broken(*args, **kwargs):
        raise RuntimeError('connection string with secrets')

    monkeypatch.setattr(admin_routes, 'get_change_history', broken)

    response = admin_client.get('/api/admin/changes')
    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'Ошибка сервера'}


def test_audit_rows_written_by_http_calls(admin_client, app, seed):
    admin_client.put('/api/schedule/day', json={'date': '2099-01-01', 'groupId': seed.group_id, 'lessons': []})

    with app.app_context():
        change = db.session.query(ScheduleChange).one()
        assert change.admin_id == seed.admin_id
        assert change.new_value['lessons'] == []
