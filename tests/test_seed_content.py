from migrations.seed_content import seed_all
from models import Review, Service, TeamMember
from utils.content import DEFAULT_SERVICES, DEFAULT_TEAM, SAMPLE_REVIEWS


def test_seed_fills_empty_tables_once(app):
    with app.app_context():
        first = seed_all()
        second = seed_all()

        assert first == {
            'services': len(DEFAULT_SERVICES),
            'team_members': len(DEFAULT_TEAM),
            'reviews': len(SAMPLE_REVIEWS)
        }
        assert second == {'services': 0, 'team_members': 0, 'reviews': 0}
        assert Service.query.count() == len(DEFAULT_SERVICES)
        assert TeamMember.query.count() == len(DEFAULT_TEAM)
        assert Review.query.filter_by(is_approved=True).count() == len(SAMPLE_REVIEWS)


def test_seeded_content_is_served(app, client):
    with app.app_context():
        seed_all()

    services = client.get('/api/services').get_json()
    reviews = client.get('/api/reviews').get_json()

    assert services['state'] == 'ready'
    assert sorted(s['title'] for s in services['items']) == sorted(s['title'] for s in DEFAULT_SERVICES)
    assert reviews['usedFallback'] is False
