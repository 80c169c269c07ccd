"""
Booking Routes - Project booking and training requests
"""

import time
from flask import request, jsonify, current_app
from utils.auth import get_auth_status
from utils.content import (
    PROJECT_TYPES, BUDGET_RANGES, TRAINING_TOPICS, OTHER_TOPIC, AVAILABILITY_OPTIONS
)
from utils.data import parse_datetime
from utils.decorators import login_required
from utils.gateway import gateway, storage, GatewayError
from utils.helpers import (
    allowed_file, file_extension, get_form_data, clean_fields, missing_fields, get_list_field
)
from utils.notifications import send_admin_notification
from utils.security import check_rate_limit
from . import booking_bp


PROJECT_FILES_BUCKET = 'project_files'


@booking_bp.route('/api/booking-options')
def booking_options():
    """Choices offered by the booking and training forms"""
    return jsonify({
        'project_types': PROJECT_TYPES,
        'budget_ranges': BUDGET_RANGES,
        'training_topics': TRAINING_TOPICS,
        'availability_options': AVAILABILITY_OPTIONS
    })


@booking_bp.route('/book-project', methods=['POST'])
@login_required
def book_project():
    """Create a project booking, optionally with one attached file"""
    auth = get_auth_status()
    form = get_form_data()
    data = clean_fields(form, ['title', 'description', 'requirements', 'type',
                               'budget_range', 'deadline'])

    missing = missing_fields(data, ['title', 'description', 'type', 'deadline'])
    if missing:
        return jsonify({'success': False, 'message': 'Required fields missing.',
                        'missing': missing}), 400

    if data['type'] not in PROJECT_TYPES:
        return jsonify({'success': False, 'message': f"Unknown project type: {data['type']}"}), 400

    if data['budget_range'] and data['budget_range'] not in BUDGET_RANGES:
        return jsonify({'success': False,
                        'message': f"Unknown budget range: {data['budget_range']}"}), 400

    deadline = parse_datetime(data['deadline'])
    if deadline is None:
        return jsonify({'success': False, 'message': 'Please select a valid deadline.'}), 400

    upload = request.files.get('file')
    if upload and upload.filename and not allowed_file(upload.filename):
        return jsonify({'success': False, 'message': 'File type not allowed.'}), 400

    try:
        project = gateway.insert('projects', {
            'client_id': auth.user_id,
            'title': data['title'][:255],
            'description': data['description'],
            'requirements': data['requirements'] or None,
            'type': data['type'],
            'budget_range': data['budget_range'][:100] or None,
            'deadline': deadline,
            'status': 'pending',
            'file_urls': []
        })
    except GatewayError as e:
        current_app.logger.error(f"Error booking project: {str(e)}")
        return jsonify({'success': False,
                        'message': 'An error occurred while booking your project.'}), 500

    if upload and upload.filename:
        object_path = (f"projects/{project['id']}/"
                       f"{int(time.time() * 1000)}.{file_extension(upload.filename)}")
        try:
            object_path = storage.upload(PROJECT_FILES_BUCKET, object_path, upload)
            public_url = storage.get_public_url(PROJECT_FILES_BUCKET, object_path)
            updated = gateway.update('projects', {'file_urls': [public_url]},
                                     eq={'id': project['id']})
            if updated:
                project = updated[0]
        except GatewayError as e:
            current_app.logger.error(f"Error uploading file for project {project['id']}: {str(e)}")
            return jsonify({'success': False,
                            'message': 'Your project was saved but the file upload failed.',
                            'project': project}), 500

    current_app.logger.info(f"Project {project['id']} booked by {auth.username}")
    send_admin_notification('New Project Booking', {
        'Client': auth.username,
        'Title': data['title'],
        'Type': data['type'],
        'Budget': data['budget_range'],
        'Deadline': deadline.strftime('%Y-%m-%d')
    })
    return jsonify({'success': True,
                    'message': "Your project has been submitted successfully. We'll contact you soon!",
                    'project': project}), 201


@booking_bp.route('/training', methods=['POST'])
def training_request():
    """Training request from a visitor or signed-in client"""
    if not check_rate_limit('training'):
        return jsonify({'success': False, 'message': 'Too many requests.'}), 429

    auth = get_auth_status()
    form = get_form_data()
    data = clean_fields(form, ['name', 'email', 'phone', 'topic', 'other_topic'], max_length=255)

    missing = missing_fields(data, ['name', 'email'])
    if missing:
        return jsonify({'success': False, 'message': 'Required fields missing.',
                        'missing': missing}), 400

    topic = data['other_topic'] if data['topic'] == OTHER_TOPIC else data['topic']
    if not topic:
        return jsonify({'success': False,
                        'message': 'Please select or specify a training topic'}), 400

    availability = get_list_field(form, 'availability')
    if not availability:
        return jsonify({'success': False,
                        'message': 'Please select at least one availability option'}), 400
    unknown = [a for a in availability if a not in AVAILABILITY_OPTIONS]
    if unknown:
        return jsonify({'success': False, 'message': 'Unknown availability option.',
                        'invalid': unknown}), 400

    try:
        training = gateway.insert('training_requests', {
            'client_id': auth.user_id,
            'name': data['name'],
            'email': data['email'],
            'phone': data['phone'] or None,
            'topic': topic,
            'availability': availability,
            'status': 'pending'
        })
    except GatewayError as e:
        current_app.logger.error(f"Error submitting training request: {str(e)}")
        return jsonify({'success': False,
                        'message': 'An error occurred while submitting your request.'}), 500

    current_app.logger.info(f"Training request {training['id']} for topic {topic}")
    send_admin_notification('New Training Request', {
        'Name': data['name'],
        'Email': data['email'],
        'Topic': topic,
        'Availability': ', '.join(AVAILABILITY_OPTIONS[a] for a in availability)
    })
    return jsonify({'success': True,
                    'message': "Your training request has been submitted successfully. We'll contact you soon!",
                    'training_request': training}), 201
