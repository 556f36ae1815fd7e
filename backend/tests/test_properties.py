"""
Property-based Testing with Hypothesis.

Random sequences of table operations must never break the occupancy
invariant: a table holds an access code exactly while it is Occupied.
"""

from hypothesis import HealthCheck, given, settings as hyp_settings, strategies as st
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from pos_api.models import Base, Table
from pos_api.services.domain import AccessCodeVerifier, AssignmentService, TableService
from pos_shared.security.access_codes import generate_access_code
from pos_shared.utils.exceptions import AppError, UnauthenticatedError
from tests.conftest import make_settings


NAMES = ["T1", "T2", "T3"]
SETTINGS = make_settings()

operation = st.one_of(
    st.tuples(st.just("add"), st.sampled_from(NAMES)),
    st.tuples(st.just("assign"), st.sampled_from(NAMES)),
    st.tuples(st.just("release"), st.sampled_from(NAMES)),
    st.tuples(st.just("delete"), st.sampled_from(NAMES)),
    st.tuples(st.just("edit"), st.sampled_from(NAMES), st.sampled_from(NAMES)),
)


def _fresh_session() -> tuple[Session, object]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return Session(bind=engine, autoflush=False), engine


def _assert_invariants(db: Session) -> None:
    rows = db.execute(
        select(Table).execution_options(populate_existing=True)
    ).scalars().all()

    for row in rows:
        if row.status == "Occupied":
            assert row.access_code
            assert row.assigned_at is not None
        else:
            assert row.status == "Free"
            assert row.access_code is None
            assert row.assigned_at is None

    codes = [r.access_code for r in rows if r.access_code]
    assert len(codes) == len(set(codes))
    names = [r.name for r in rows]
    assert len(names) == len(set(names))


class TestTableInvariantProperties:

    @given(ops=st.lists(operation, min_size=1, max_size=25))
    @hyp_settings(max_examples=40, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_code_present_iff_occupied(self, ops):
        """Property: after every operation, access_code is set iff Occupied."""
        db, engine = _fresh_session()
        try:
            tables = TableService(db)
            assignments = AssignmentService(db, SETTINGS)

            def table_id(name):
                row = tables.repo.find_by_name(name)
                return row.id if row is not None else None

            for op in ops:
                kind, name = op[0], op[1]
                try:
                    if kind == "add":
                        tables.add(name, 4)
                    elif table_id(name) is None:
                        continue
                    elif kind == "assign":
                        assignments.assign(table_id(name))
                    elif kind == "release":
                        assignments.release(table_id(name))
                    elif kind == "delete":
                        tables.delete(table_id(name))
                    elif kind == "edit":
                        tables.edit(table_id(name), op[2], 6)
                except AppError:
                    pass
                _assert_invariants(db)
        finally:
            db.close()
            engine.dispose()

    @given(ops=st.lists(st.sampled_from(["assign", "release"]), min_size=1, max_size=20))
    @hyp_settings(max_examples=30, deadline=None)
    def test_only_current_code_authenticates(self, ops):
        """Property: every code except the live one is rejected."""
        db, engine = _fresh_session()
        try:
            table = TableService(db).add("T1", 4)
            assignments = AssignmentService(db, SETTINGS)
            verifier = AccessCodeVerifier(db)
            issued: list[str] = []

            for op in ops:
                try:
                    if op == "assign":
                        issued.append(assignments.assign(table.id).access_code)
                    else:
                        assignments.release(table.id)
                except AppError:
                    pass

            live = TableService(db).find_by_id(table.id).access_code
            for code in issued:
                if code == live:
                    assert verifier.verify(code).id == table.id
                else:
                    try:
                        verifier.verify(code)
                        raise AssertionError("stale code accepted")
                    except UnauthenticatedError:
                        pass
        finally:
            db.close()
            engine.dispose()

    @given(nbytes=st.integers(min_value=8, max_value=64))
    def test_generated_codes_are_urlsafe(self, nbytes):
        code = generate_access_code(nbytes)
        assert len(code) >= nbytes
        assert all(c.isalnum() or c in "-_" for c in code)
