from sqlalchemy import event
from sqlalchemy.orm import with_loader_criteria

from app.db.mixins import SoftDeleteMixin


def add_loader_criteria(session):
    """Hide soft-deleted rows from every ORM select issued by ``session``.

    A statement opts out with ``execution_options(include_deleted=True)``.
    """

    @event.listens_for(session.sync_session, "do_orm_execute")
    def _add_criteria(execute_state):
        if (
            execute_state.is_select
            and not execute_state.is_column_load
            and not execute_state.is_relationship_load
            and not execute_state.execution_options.get("include_deleted", False)
        ):
            execute_state.statement = execute_state.statement.options(
                with_loader_criteria(
                    SoftDeleteMixin,
                    lambda cls: cls.deleted_at.is_(None),
                    include_aliases=True,
                )
            )
