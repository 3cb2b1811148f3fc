from urllib.parse import urlsplit
from flask import Blueprint, request, jsonify, render_template, redirect, url_for, session, current_app
from flask_login import login_user, logout_user, login_required, current_user
from animalia import db
from animalia.models import AdminUser
from animalia.services.admin import AdminService

admin = Blueprint('admin', __name__)


def _safe_next(target):
    # Only same-site relative paths
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith('/') or target.startswith('//'):
        return None
    return target


@admin.route('/admin/login', methods=['GET', 'POST'])
def login():
    if request.method == 'GET':
        if current_user.is_authenticated:
            return redirect(url_for('admin.dashboard'))
        return render_template('admin/login.html', next=request.args.get('next', ''))

    data = request.get_json(silent=True) or request.form
    password = data.get('password')
    if AdminUser.check_password(password):
        login_user(AdminUser())
        session.permanent = True
        current_app.logger.info(f"[admin-login] from={request.remote_addr}")
        return redirect(_safe_next(data.get('next')) or url_for('admin.dashboard'))
    current_app.logger.warning(f"[admin-login-failed] from={request.remote_addr}")
    return render_template('admin/login.html', error='Wrong password.', next=data.get('next', '')), 401


@admin.route('/admin/logout')
def logout():
    logout_user()
    return redirect(url_for('admin.login'))


@admin.route('/admin')
@login_required
def dashboard():
    overview = AdminService(db.session).overview()
    return render_template('admin/dashboard.html', overview=overview)


@admin.route('/admin/szekreny/create', methods=['POST'])
@login_required
def create_room():
    data = request.get_json(silent=True) or request.form
    room_id = data.get('room_id', data.get('szekreny'))
    AdminService(db.session).create_room(room_id, data.get('name'))
    return jsonify({'success': True})


@admin.route('/admin/szekreny/<room_id>/save', methods=['PUT'])
@login_required
def save_room(room_id):
    payload = request.get_json(silent=True)
    room = AdminService(db.session).save_room(room_id, payload if payload is not None else {})
    return jsonify({'success': True, 'room': room.to_dict()})


@admin.route('/admin/szekreny/<room_id>', methods=['DELETE'])
@login_required
def delete_room(room_id):
    AdminService(db.session).delete_room(room_id)
    return jsonify({'success': True})


@admin.route('/db/clear')
@login_required
def clear_leaderboards():
    AdminService(db.session).reset_leaderboards()
    return redirect(url_for('main.home'))
