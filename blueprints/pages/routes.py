"""
Pages Routes - Site-level data and stored files
"""

import os
from flask import jsonify, send_from_directory, abort, current_app
from werkzeug.utils import secure_filename
from utils.auth import get_auth_status
from utils.badges import with_icons
from utils.content import PERSONAL_INFO, PROJECTS, SOCIAL_LINKS, get_project
from utils.gateway import storage, GatewayError
from . import pages_bp


@pages_bp.route('/api/site')
def site():
    """Hero, featured projects, social links and the visitor's auth status"""
    return jsonify({
        'profile': PERSONAL_INFO,
        'featured_projects': [p for p in PROJECTS if p.get('featured')],
        'social_links': with_icons(SOCIAL_LINKS),
        'auth': get_auth_status().to_dict()
    })


@pages_bp.route('/api/projects')
def projects():
    return jsonify({'items': PROJECTS})


@pages_bp.route('/api/projects/<project_id>')
def project_detail(project_id):
    """Project detail page data"""
    project = get_project(project_id)
    if not project:
        return jsonify({'success': False, 'message': 'Project not found.'}), 404

    related = [p for p in PROJECTS
               if p['id'] != project_id and set(p['tags']) & set(project['tags'])]
    return jsonify({'project': project, 'related': related[:3]})


@pages_bp.route('/storage/<bucket>/<path:object_path>')
def stored_file(bucket, object_path):
    """Serve an uploaded object by its public URL"""
    try:
        local_path = storage.local_path(bucket, object_path)
    except GatewayError:
        abort(404)
    directory, filename = os.path.split(os.path.abspath(local_path))
    if not os.path.isfile(os.path.join(directory, filename)):
        current_app.logger.info(f"Missing storage object: {secure_filename(bucket)}/{object_path}")
        abort(404)
    return send_from_directory(directory, filename)
