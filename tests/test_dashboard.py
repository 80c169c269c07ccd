from datetime import datetime, timedelta

import pytest

from extensions import db
from models import Message, Meeting, Project, Review, TrainingRequest


def add_project(app, client_id, title, created_at=None, status='pending'):
    with app.app_context():
        project = Project(client_id=client_id, title=title, description='desc', type='software',
                          status=status, created_at=created_at or datetime.utcnow())
        db.session.add(project)
        db.session.commit()
        return project.id


def test_dashboard_requires_login(client):
    assert client.get('/dashboard/').status_code == 401


def test_client_sees_only_own_projects(app, client_user, make_user):
    test_client, user_id = client_user
    other_id = make_user('mallory')
    base = datetime(2024, 1, 1)
    add_project(app, user_id, 'old', created_at=base)
    add_project(app, user_id, 'new', created_at=base + timedelta(days=2), status='completed')
    add_project(app, other_id, 'not mine')

    data = test_client.get('/dashboard/').get_json()

    projects = data['projects']['items']
    assert [p['title'] for p in projects] == ['new', 'old']
    assert projects[0]['badge']['color'] == 'bg-green-500'
    assert 'training_requests' not in data
    assert data['auth']['userId'] == user_id


def test_meetings_show_upcoming_only(app, client_user):
    test_client, user_id = client_user
    now = datetime.utcnow()
    with app.app_context():
        db.session.add(Meeting(client_id=user_id, title='past', meeting_time=now - timedelta(hours=1)))
        db.session.add(Meeting(client_id=user_id, title='later', meeting_time=now + timedelta(days=3)))
        db.session.add(Meeting(client_id=user_id, title='soon', meeting_time=now + timedelta(hours=2)))
        db.session.commit()

    meetings = test_client.get('/dashboard/').get_json()['meetings']

    assert meetings['state'] == 'ready'
    assert [m['title'] for m in meetings['items']] == ['soon', 'later']


def test_client_messages_are_limited_to_their_projects(app, client_user, make_user):
    test_client, user_id = client_user
    other_id = make_user('mallory')
    mine = add_project(app, user_id, 'mine')
    theirs = add_project(app, other_id, 'theirs')
    with app.app_context():
        db.session.add(Message(project_id=mine, sender_id=other_id, content='for alice'))
        db.session.add(Message(project_id=theirs, sender_id=other_id, content='for mallory'))
        db.session.add(Message(content='contact form', name='Ana', email='ana@example.com'))
        db.session.commit()

    messages = test_client.get('/dashboard/').get_json()['messages']

    assert [m['content'] for m in messages['items']] == ['for alice']


def test_client_without_projects_has_no_messages(client_user):
    test_client, _ = client_user

    messages = test_client.get('/dashboard/').get_json()['messages']

    assert messages['state'] == 'empty'
    assert messages['items'] == []


def test_owner_sees_everything(app, owner, make_user):
    test_client, _ = owner
    first = make_user('alice')
    second = make_user('mallory')
    add_project(app, first, 'a')
    add_project(app, second, 'b')
    with app.app_context():
        db.session.add(TrainingRequest(name='Dev', email='dev@example.com', topic='Python',
                                       availability=['weekday_morning']))
        db.session.add(Message(content='contact form', name='Ana', email='ana@example.com'))
        db.session.commit()

    data = test_client.get('/dashboard/').get_json()

    assert sorted(p['title'] for p in data['projects']['items']) == ['a', 'b']
    assert [m['content'] for m in data['messages']['items']] == ['contact form']
    assert data['training_requests']['items'][0]['topic'] == 'Python'


def test_client_can_message_own_project(app, client_user):
    test_client, user_id = client_user
    project_id = add_project(app, user_id, 'mine')

    response = test_client.post(f'/dashboard/projects/{project_id}/messages',
                                json={'content': 'Any update?'})

    assert response.status_code == 201
    message = response.get_json()['message']
    assert message['sender_id'] == user_id
    assert message['project_id'] == project_id


def test_client_cannot_message_other_project(app, client_user, make_user):
    test_client, _ = client_user
    project_id = add_project(app, make_user('mallory'), 'theirs')

    response = test_client.post(f'/dashboard/projects/{project_id}/messages',
                                json={'content': 'hi'})

    assert response.status_code == 403


def test_message_on_missing_project(client_user):
    test_client, _ = client_user

    assert test_client.post('/dashboard/projects/missing/messages',
                            json={'content': 'hi'}).status_code == 404
    assert test_client.post('/dashboard/projects/missing/messages',
                            json={'content': ''}).status_code == 400


def test_owner_updates_project_status(app, owner, make_user):
    test_client, _ = owner
    project_id = add_project(app, make_user('alice'), 'a')

    response = test_client.post(f'/dashboard/projects/{project_id}/status',
                                json={'status': 'in_progress'})

    assert response.status_code == 200
    project = response.get_json()['project']
    assert project['status'] == 'in_progress'
    assert project['badge']['label'] == 'In Progress'


@pytest.mark.parametrize('project_id, status, expected', [
    ('missing', 'completed', 404),
    (None, 'archived', 400),
])
def test_project_status_errors(app, owner, make_user, project_id, status, expected):
    test_client, _ = owner
    project_id = project_id or add_project(app, make_user('alice'), 'a')

    response = test_client.post(f'/dashboard/projects/{project_id}/status', json={'status': status})

    assert response.status_code == expected


def test_owner_operations_need_owner(client_user):
    test_client, _ = client_user

    assert test_client.post('/dashboard/projects/x/status',
                            json={'status': 'completed'}).status_code == 403
    assert test_client.post('/dashboard/meetings', json={}).status_code == 403
    assert test_client.post('/dashboard/messages/x/read').status_code == 403
    assert test_client.post('/dashboard/reviews/x/approve').status_code == 403


def test_owner_schedules_meeting_for_client(app, owner, make_user):
    test_client, _ = owner
    client_id = make_user('alice')
    when = (datetime.utcnow() + timedelta(days=1)).replace(microsecond=0)

    response = test_client.post('/dashboard/meetings', json={
        'title': 'Kickoff', 'meeting_time': when.isoformat(), 'duration': '45',
        'meeting_link': 'https://meet.example.test/kickoff', 'client_id': client_id
    })

    assert response.status_code == 201
    meeting = response.get_json()['meeting']
    assert meeting['duration'] == 45
    assert meeting['meeting_time'] == when.isoformat()

    login = app.test_client()
    login.post('/auth/login', json={'username': 'alice', 'password': 'correct-horse-battery'})
    titles = [m['title'] for m in login.get('/dashboard/').get_json()['meetings']['items']]
    assert titles == ['Kickoff']


@pytest.mark.parametrize('payload', [
    {'meeting_time': '2030-01-01T10:00'},
    {'title': 'Kickoff', 'meeting_time': 'tomorrow'},
    {'title': 'Kickoff', 'meeting_time': '2030-01-01T10:00', 'duration': '-5'},
    {'title': 'Kickoff', 'meeting_time': '2030-01-01T10:00', 'duration': 'an hour'},
])
def test_meeting_validation(owner, payload):
    test_client, _ = owner

    assert test_client.post('/dashboard/meetings', json=payload).status_code == 400


def test_owner_marks_message_read(app, owner):
    test_client, _ = owner
    with app.app_context():
        message = Message(content='contact form', name='Ana', email='ana@example.com')
        db.session.add(message)
        db.session.commit()
        message_id = message.id

    response = test_client.post(f'/dashboard/messages/{message_id}/read')

    assert response.status_code == 200
    assert response.get_json()['message']['is_read'] is True
    assert test_client.post('/dashboard/messages/missing/read').status_code == 404


def test_owner_approves_review(app, owner, client):
    test_client, _ = owner
    with app.app_context():
        review = Review(reviewer_name='Ana', content='Great', rating=5)
        db.session.add(review)
        db.session.commit()
        review_id = review.id

    approved = test_client.post(f'/dashboard/reviews/{review_id}/approve')

    assert approved.get_json()['review']['is_approved'] is True
    assert [r['id'] for r in client.get('/api/reviews').get_json()['items']] == [review_id]

    test_client.post(f'/dashboard/reviews/{review_id}/approve?approved=false')
    assert client.get('/api/reviews').get_json()['usedFallback'] is True
