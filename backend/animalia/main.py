from flask import Blueprint, request, jsonify, render_template, redirect, url_for, current_app
from flask_login import login_required
from animalia import db
from animalia.errors import NotFound
from animalia.repositories import RoomRepository, LeaderboardRepository
from animalia.services.admin import AdminService, parse_room_id
from animalia.services.game import build_play_round
from animalia.services.leaderboard import ranked_view
from animalia.services.leaderboard.ranking import utcnow
from animalia.services.leaderboard.submit import submit_score

main = Blueprint('main', __name__)


def _request_data():
    # The game pages post urlencoded forms; scripts may post JSON
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _field(data, *keys):
    for key in keys:
        if key in data:
            return data[key]
    return None


def _public_room_id(raw, max_room):
    """Room id for a public page, or None when the page should go home."""
    try:
        room_id = parse_room_id(raw)
    except NotFound:
        return None
    if room_id > max_room:
        return None
    return room_id


@main.route('/')
def home():
    return render_template('home.html')


@main.route('/info')
def info():
    return render_template('info.html')


@main.route('/<room_id>')
def start(room_id):
    room_id = _public_room_id(room_id, current_app.config.get('START_PAGE_MAX_ROOM', 2))
    room = RoomRepository(db.session).get(room_id) if room_id else None
    if not room:
        return redirect(url_for('main.home'))
    leaderboard = LeaderboardRepository(db.session).get(room_id)
    leaders = ranked_view(leaderboard.score_entries, utcnow(), limit=3) if leaderboard else []
    return render_template('start.html', room=room, leaders=leaders)


@main.route('/<room_id>/leader')
def leader(room_id):
    room_id = _public_room_id(room_id, current_app.config.get('PUBLIC_MAX_ROOM', 4))
    leaderboard = LeaderboardRepository(db.session).get(room_id) if room_id else None
    if not leaderboard:
        return redirect(url_for('main.home'))
    room = RoomRepository(db.session).get(room_id)
    leaders = ranked_view(leaderboard.score_entries, utcnow())
    return render_template('leaderboard.html', room_id=room_id, room=room, leaders=leaders)


@main.route('/<room_id>/play')
def play(room_id):
    room_id = _public_room_id(room_id, current_app.config.get('PUBLIC_MAX_ROOM', 4))
    room = RoomRepository(db.session).get(room_id) if room_id else None
    if not room:
        return redirect(url_for('main.home'))
    leaderboard = LeaderboardRepository(db.session).get(room_id)
    names = [e.player_name for e in leaderboard.score_entries] if leaderboard else []
    play_round = build_play_round(
        room.items or [],
        existing_names=names,
        sample_size=int(current_app.config.get('PLAY_SAMPLE_SIZE', 10)),
    )
    return render_template('play.html', room=room, play_round=play_round)


@main.route('/pushAdmin')
@login_required
def push_admin():
    return render_template('push.html')


@main.route('/push', methods=['POST'])
def push():
    data = _request_data()
    item = AdminService(db.session).push_item(
        _field(data, 'room_id', 'szekreny'),
        _field(data, 'label', 'nev'),
        _field(data, 'code', 'szam'),
        _field(data, 'image_ref', 'url') or '',
    )
    return jsonify({'success': item['label']})


@main.route('/newResult', methods=['POST'])
def new_result():
    data = _request_data()
    rank = submit_score(
        db.session,
        _field(data, 'room_id', 'szekreny'),
        _field(data, 'player_name', 'nev'),
        _field(data, 'score', 'pont'),
    )
    return jsonify({'success': rank})
