"""
Portfolio Routes - Public portfolio sections
Handles: About tabs, GitHub activity, services, team, reviews, contact form
"""

from flask import request, jsonify, current_app
from utils.content import (
    SKILLS, EXPERIENCES, EDUCATION, SAMPLE_REVIEWS, DEFAULT_TEAM,
    SOCIAL_LINKS, github_username_from_links
)
from utils.gateway import gateway, GatewayError
from utils.github_activity import ActivityFetcher, GITHUB_API_ROOT
from utils.helpers import get_form_data, clean_fields, missing_fields
from utils.loaders import load_collection
from utils.notifications import send_admin_notification
from utils.security import check_rate_limit
from utils.tabs import ABOUT_TABS, TabSelector
from . import portfolio_bp


GITHUB_MAX_PER_PAGE = 100


@portfolio_bp.route('/api/about')
def about():
    """About section: only the active tab's content block is returned"""
    blocks = {
        'skills': SKILLS,
        'experience': EXPERIENCES,
        'education': EDUCATION
    }
    selector = TabSelector(ABOUT_TABS)
    tab = request.args.get('tab')
    if tab:
        try:
            selector.select(tab)
        except ValueError:
            return jsonify({'success': False, 'message': f'Unknown tab: {tab}',
                            'tabs': list(selector.categories)}), 400

    return jsonify({
        'tabs': list(selector.categories),
        'active': selector.active,
        'visible': selector.visible_blocks(blocks),
        'content': selector.render(blocks)
    })


@portfolio_bp.route('/api/github-activity')
def github_activity():
    """Recent public GitHub activity as {items, isLoading, error}"""
    username = (request.args.get('username') or current_app.config.get('GITHUB_USERNAME')
                or github_username_from_links(SOCIAL_LINKS))
    limit = request.args.get('limit', type=int)
    if limit is None:
        limit = current_app.config.get('GITHUB_ACTIVITY_LIMIT', 4)
    if limit <= 0 or limit > GITHUB_MAX_PER_PAGE:
        return jsonify({'success': False,
                        'message': f'limit must be between 1 and {GITHUB_MAX_PER_PAGE}.'}), 400

    if not username:
        return jsonify({'success': False, 'message': 'A GitHub username is required.'}), 400

    timeout = current_app.config.get('GITHUB_TIMEOUT', 10)
    with ActivityFetcher(api_root=current_app.config.get('GITHUB_API_ROOT') or GITHUB_API_ROOT,
                         timeout=timeout, max_workers=1) as fetcher:
        fetcher.fetch(username, limit)
        snapshot = fetcher.wait(timeout=timeout + 1)

    payload = snapshot.to_dict()
    payload['username'] = username
    return jsonify(payload)


@portfolio_bp.route('/api/services')
def services():
    result = load_collection('services', order_by='created_at', ascending=True)
    return jsonify(result.to_dict())


@portfolio_bp.route('/api/team')
def team():
    result = load_collection('team_members', order_by='created_at', ascending=True,
                             fallback=DEFAULT_TEAM)
    return jsonify(result.to_dict())


@portfolio_bp.route('/api/reviews', methods=['GET'])
def reviews():
    """Approved reviews, newest first; sample reviews when there are none"""
    result = load_collection('reviews', filters={'is_approved': True},
                             order_by='created_at', ascending=False,
                             fallback=SAMPLE_REVIEWS)
    return jsonify(result.to_dict())


@portfolio_bp.route('/api/reviews', methods=['POST'])
def submit_review():
    """Visitor review submission, held until the owner approves it"""
    if not check_rate_limit('reviews'):
        return jsonify({'success': False, 'message': 'Too many requests.'}), 429

    form = get_form_data()
    data = clean_fields(form, ['reviewer_name', 'project_name', 'content'])
    missing = missing_fields(data, ['reviewer_name', 'content'])
    if missing:
        return jsonify({'success': False, 'message': 'Required fields missing.',
                        'missing': missing}), 400

    try:
        rating = float(form.get('rating', 5))
    except (TypeError, ValueError):
        rating = None
    if rating is None or not 1 <= rating <= 5:
        return jsonify({'success': False, 'message': 'Rating must be between 1 and 5.'}), 400

    try:
        review = gateway.insert('reviews', {
            'reviewer_name': data['reviewer_name'][:255],
            'project_name': data['project_name'][:255] or None,
            'content': data['content'],
            'rating': rating,
            'is_approved': False
        })
    except GatewayError as e:
        current_app.logger.error(f"Review submission error: {str(e)}")
        return jsonify({'success': False, 'message': 'Error submitting review. Please try again.'}), 500

    current_app.logger.info(f"Review {review['id']} submitted by {data['reviewer_name']}")
    return jsonify({'success': True, 'message': 'Thank you! Your review will appear once approved.',
                    'review': review}), 201


@portfolio_bp.route('/contact', methods=['POST'])
def contact():
    """Portfolio contact form processing - saves to the messages table"""
    form = get_form_data()

    # Honeypot spam protection
    if form.get('website'):
        return jsonify({'success': True})

    if not check_rate_limit('contact'):
        return jsonify({'success': False, 'message': 'Too many requests.'}), 429

    data = clean_fields(form, ['name', 'email', 'subject', 'message'])
    missing = missing_fields(data, ['name', 'email', 'message'])
    if missing:
        return jsonify({'success': False, 'message': 'Required fields missing.',
                        'missing': missing}), 400

    try:
        message = gateway.insert('messages', {
            'name': data['name'][:255],
            'email': data['email'][:255],
            'subject': data['subject'][:255] or None,
            'content': data['message'],
            'is_read': False
        })
    except GatewayError as e:
        current_app.logger.error(f"Contact form error: {str(e)}")
        return jsonify({'success': False, 'message': 'Error sending message. Please try again.'}), 500

    current_app.logger.info(f"Contact message saved, message_id: {message['id']}")
    send_admin_notification('New Portfolio Message', {
        'From': data['name'],
        'Email': data['email'],
        'Subject': data['subject'],
        'Message': data['message']
    })
    return jsonify({'success': True,
                    'message': "Thank you for your message! I'll get back to you soon."}), 201
