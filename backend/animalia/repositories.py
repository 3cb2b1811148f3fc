from sqlalchemy import select
from sqlalchemy.orm import Session
from typing import List
from animalia.errors import NotFound
from animalia.models import Room, Leaderboard


class _Repository:
    model = None
    label = 'Record'

    def __init__(self, session: Session):
        self.session = session

    def get(self, room_id: int, for_update: bool = False):
        # for_update locks the row until commit on backends with row locks
        if for_update:
            return self.session.get(self.model, room_id, with_for_update=True, populate_existing=True)
        return self.session.get(self.model, room_id)

    def require(self, room_id: int, for_update: bool = False):
        record = self.get(room_id, for_update=for_update)
        if record is None:
            raise NotFound(f'{self.label} {room_id} not found.')
        return record

    def exists(self, room_id: int) -> bool:
        return self.get(room_id) is not None

    def list_all(self) -> List:
        return list(self.session.scalars(select(self.model).order_by(self.model.room_id)))

    def put(self, record) -> None:
        self.session.add(record)

    def delete(self, record) -> None:
        self.session.delete(record)


class RoomRepository(_Repository):
    model = Room
    label = 'Room'


class LeaderboardRepository(_Repository):
    model = Leaderboard
    label = 'Leaderboard'
