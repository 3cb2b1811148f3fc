"""Room management: create/save/delete room pairs, push items, reset boards.

A room and its leaderboard are separate rows joined only by ``room_id``;
every operation here keeps the pair in step within one commit.
"""

import logging
import math
from sqlalchemy.orm import Session
from animalia.errors import Duplicate, NotFound, ValidationFailure
from animalia.models import Room, Leaderboard
from animalia.repositories import RoomRepository, LeaderboardRepository
from animalia.services.leaderboard.ranking import ScoreEntry, parse_timestamp, utcnow

logger = logging.getLogger(__name__)


def parse_room_id(value) -> int:
    """Turn a path/body value into a positive room id, or raise NotFound."""
    if isinstance(value, bool):
        raise NotFound(f'Invalid room id: {value!r}')
    try:
        room_id = int(str(value).strip())
    except (TypeError, ValueError):
        raise NotFound(f'Invalid room id: {value!r}')
    if room_id < 1:
        raise NotFound(f'Invalid room id: {value!r}')
    return room_id


def to_number(value, field_name: str):
    """Coerce form/JSON input to int or float; reject anything else."""
    if isinstance(value, bool) or value is None:
        raise ValidationFailure(f'{field_name} must be a number')
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ValidationFailure(f'{field_name} must be a number')
    if isinstance(number, float):
        if not math.isfinite(number):
            raise ValidationFailure(f'{field_name} must be a finite number')
        if number.is_integer():
            number = int(number)
    return number


def _pick(data: dict, *keys, default=None):
    # New field names first, then the legacy Hungarian ones
    for key in keys:
        if key in data:
            return data[key]
    return default


def normalize_name(value):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationFailure('name must be a string')
    return value.strip() or None


def normalize_item(data) -> dict:
    if not isinstance(data, dict):
        raise ValidationFailure('Each item must be an object')
    label = _pick(data, 'label', 'nev', default='')
    return {
        'label': '' if label is None else str(label),
        'code': to_number(_pick(data, 'code', 'szam'), 'code'),
        'image_ref': str(_pick(data, 'image_ref', 'url', default='') or ''),
    }


def normalize_entry(data) -> ScoreEntry:
    if not isinstance(data, dict):
        raise ValidationFailure('Each leaderboard entry must be an object')
    name = _pick(data, 'player_name', 'nev')
    if not name or not str(name).strip():
        raise ValidationFailure('player_name is required')
    try:
        recorded_at = parse_timestamp(_pick(data, 'recorded_at', 'created'))
    except (TypeError, ValueError):
        raise ValidationFailure('recorded_at must be an ISO-8601 timestamp')
    return ScoreEntry(
        player_name=str(name).strip(),
        score=to_number(_pick(data, 'score', 'pont'), 'score'),
        recorded_at=recorded_at,
    )


class AdminService:
    def __init__(self, session: Session):
        self.session = session
        self.rooms = RoomRepository(session)
        self.leaderboards = LeaderboardRepository(session)

    def overview(self):
        """All rooms with their leaderboards, for the dashboard."""
        boards = {lb.room_id: lb for lb in self.leaderboards.list_all()}
        return [(room, boards.get(room.room_id)) for room in self.rooms.list_all()]

    def create_room(self, room_id, name=None) -> Room:
        room_id = parse_room_id(room_id)
        if self.rooms.exists(room_id) or self.leaderboards.exists(room_id):
            raise Duplicate(f'Room {room_id} already exists.')
        room = Room(room_id=room_id, name=normalize_name(name), items=[])
        self.rooms.put(room)
        self.leaderboards.put(Leaderboard(room_id=room_id, entries=[]))
        self.session.commit()
        logger.info(f"[room-create] room={room_id} name={room.name!r}")
        return room

    def save_room(self, room_id, payload) -> Room:
        """Overwrite a room's items and its leaderboard entries.

        ``items`` and ``entries`` are each replaced when present in the
        payload and left alone when absent.
        """
        room_id = parse_room_id(room_id)
        if not isinstance(payload, dict):
            raise ValidationFailure('Payload must be a JSON object')
        room = self.rooms.require(room_id, for_update=True)

        items = _pick(payload, 'items', 'allatok')
        entries = _pick(payload, 'entries', 'leaders')
        if items is not None and not isinstance(items, list):
            raise ValidationFailure('items must be a list')
        if entries is not None and not isinstance(entries, list):
            raise ValidationFailure('entries must be a list')
        new_items = [normalize_item(i) for i in items] if items is not None else None
        new_entries = [normalize_entry(e) for e in entries] if entries is not None else None
        if new_entries is not None:
            names = [e.player_name for e in new_entries]
            repeated = sorted({n for n in names if names.count(n) > 1})
            if repeated:
                raise ValidationFailure(f'Duplicate player_name in entries: {", ".join(repeated)}')
        new_name = normalize_name(payload['name']) if 'name' in payload else None

        if 'name' in payload:
            room.name = new_name
        if new_items is not None:
            room.items = new_items

        leaderboard = self.leaderboards.get(room_id, for_update=True)
        if leaderboard is None:
            logger.warning(f"[room-save] room={room_id} had no leaderboard, recreating")
            leaderboard = Leaderboard(room_id=room_id, entries=[])
            self.leaderboards.put(leaderboard)
        if new_entries is not None:
            leaderboard.score_entries = new_entries

        self.session.commit()
        logger.info(
            f"[room-save] room={room_id} items={len(room.items or [])} entries={len(leaderboard.entries or [])}"
        )
        return room

    def delete_room(self, room_id) -> None:
        room_id = parse_room_id(room_id)
        room = self.rooms.require(room_id)
        leaderboard = self.leaderboards.get(room_id)
        self.rooms.delete(room)
        if leaderboard is not None:
            self.leaderboards.delete(leaderboard)
        self.session.commit()
        logger.info(f"[room-delete] room={room_id}")

    def push_item(self, room_id, label, code, image_ref='') -> dict:
        """Append a single item to a room and return it."""
        room_id = parse_room_id(room_id)
        item = normalize_item({'label': label, 'code': code, 'image_ref': image_ref})
        room = self.rooms.require(room_id, for_update=True)
        room.items = list(room.items or []) + [item]
        self.session.commit()
        logger.info(f"[room-push] room={room_id} label={item['label']!r} code={item['code']}")
        return item

    def reset_leaderboards(self) -> int:
        boards = self.leaderboards.list_all()
        for leaderboard in boards:
            leaderboard.entries = []
        self.session.commit()
        logger.info(f"[leaderboard-reset] cleared={len(boards)} at={utcnow().isoformat()}")
        return len(boards)
