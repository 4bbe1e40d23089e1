"""Entity repository adapter over the Users, Projects and TaskLists tables.

Resolvers only ever talk to the store through this module. Ids cross the API
as strings; the conversion to the native UUID type happens here and nowhere
else. Every call opens its own short-lived session on the shared engine and
runs in the threadpool, so independent lookups can be awaited concurrently.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
import logging
import uuid

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import String, cast, delete, false, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, select

from taskbri.models.project import Project
from taskbri.models.task_list import TaskList
from taskbri.models.user import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def parse_id(value: Any) -> Optional[uuid.UUID]:
    """Convert an API id string to the store's id type, None if malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class Collection(Generic[ModelT]):
    """Minimal CRUD surface for one table."""

    def __init__(self, engine: Engine, model: Type[ModelT]):
        self.engine = engine
        self.model = model

    def _criteria(self, clauses, filters: Dict[str, Any]) -> list:
        criteria = list(clauses)
        for name, value in filters.items():
            column = getattr(self.model, name)
            if self.model.model_fields[name].annotation is uuid.UUID:
                value = parse_id(value)
                if value is None:
                    # A malformed id can never match anything
                    criteria.append(false())
                    continue
            criteria.append(column == value)
        return criteria

    def _find_by_id(self, entity_id) -> Optional[ModelT]:
        native_id = parse_id(entity_id)
        if native_id is None:
            return None
        with Session(self.engine) as session:
            return session.get(self.model, native_id)

    def _find_many(self, criteria: list, limit: Optional[int] = None) -> List[ModelT]:
        statement = select(self.model).where(*criteria)
        if limit is not None:
            statement = statement.limit(limit)
        with Session(self.engine) as session:
            return list(session.exec(statement).all())

    def _insert_one(self, entity: ModelT) -> str:
        with Session(self.engine) as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return str(entity.id)

    def _update_one(self, entity_id, patch: Dict[str, Any]) -> bool:
        native_id = parse_id(entity_id)
        if native_id is None:
            return False
        with Session(self.engine) as session:
            entity = session.get(self.model, native_id)
            if entity is None:
                return False
            for field, value in patch.items():
                setattr(entity, field, value)
            session.add(entity)
            session.commit()
            return True

    def _delete_one(self, entity_id) -> bool:
        native_id = parse_id(entity_id)
        if native_id is None:
            return False
        with Session(self.engine) as session:
            entity = session.get(self.model, native_id)
            if entity is None:
                return False
            session.delete(entity)
            session.commit()
            return True

    def _delete_many(self, criteria: list) -> int:
        if not criteria:
            raise ValueError(f"Refusing to delete every row of {self.model.__tablename__}")
        with Session(self.engine) as session:
            result = session.execute(delete(self.model).where(*criteria))
            session.commit()
            return result.rowcount or 0

    async def find_by_id(self, entity_id) -> Optional[ModelT]:
        return await run_in_threadpool(self._find_by_id, entity_id)

    async def find_one(self, *clauses, **filters) -> Optional[ModelT]:
        rows = await run_in_threadpool(self._find_many, self._criteria(clauses, filters), 1)
        return rows[0] if rows else None

    async def find_many(self, *clauses, **filters) -> List[ModelT]:
        return await run_in_threadpool(self._find_many, self._criteria(clauses, filters))

    async def insert_one(self, entity: ModelT) -> str:
        return await run_in_threadpool(self._insert_one, entity)

    async def update_one(self, entity_id, patch: Dict[str, Any]) -> bool:
        return await run_in_threadpool(self._update_one, entity_id, patch)

    async def delete_one(self, entity_id) -> bool:
        return await run_in_threadpool(self._delete_one, entity_id)

    async def delete_many(self, *clauses, **filters) -> int:
        deleted = await run_in_threadpool(self._delete_many, self._criteria(clauses, filters))
        logger.info(f"Deleted {deleted} row(s) from {self.model.__tablename__}")
        return deleted


class ProjectCollection(Collection[Project]):
    def has_member(self, user_id):
        """Array-contains predicate on Project.user_ids."""
        user_id = str(user_id)
        if self.engine.dialect.name == "postgresql":
            # For PostgreSQL, use the @> operator on the JSONB array
            return type_coerce(Project.user_ids, JSONB).contains([user_id])
        # Elsewhere the array is stored as JSON text; match the quoted id
        return cast(Project.user_ids, String).like(f'%"{user_id}"%')


class Repository:
    """Handle to the three collections, built around one shared engine."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.users: Collection[User] = Collection(engine, User)
        self.projects = ProjectCollection(engine, Project)
        self.task_lists: Collection[TaskList] = Collection(engine, TaskList)

    def _delete_project_cascade(self, project_id) -> bool:
        native_id = parse_id(project_id)
        if native_id is None:
            return False
        # One transaction: either the project and its task lists go, or neither
        with Session(self.engine) as session:
            session.execute(delete(TaskList).where(TaskList.project_id == native_id))
            result = session.execute(delete(Project).where(Project.id == native_id))
            session.commit()
            return bool(result.rowcount)

    async def delete_project_cascade(self, project_id) -> bool:
        """Delete a project and every task list that references it."""
        deleted = await run_in_threadpool(self._delete_project_cascade, project_id)
        logger.info(f"Deleted project {project_id} with its task lists: {deleted}")
        return deleted
