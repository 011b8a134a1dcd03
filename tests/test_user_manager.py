import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import InvalidXPAmountError, UserNotFoundError
from models.user import UserModel
from schemas.user import UserClaims
from utils.user_manager import UserManager


def _ranks_by_xp(db):
    rows = db.query(UserModel).order_by(UserModel.rank).all()
    return [(row.rank, row.xp) for row in rows]


def test_first_login_provisions_user(db):
    manager = UserManager(db)
    user = manager.get_or_create_user(
        UserClaims(sub="u1", email="ada@example.com", first_name="Ada")
    )

    assert user.user_id == "u1"
    assert user.xp == 0
    assert user.rank == 1
    assert user.badges == []


def test_later_login_refreshes_profile_fields(db, make_user):
    make_user("u1", email="old@example.com", first_name="Ada")

    user = UserManager(db).get_or_create_user(
        UserClaims(sub="u1", email="new@example.com")
    )

    assert user.email == "new@example.com"
    assert user.first_name == "Ada"


def test_award_xp_adds_exactly_delta(db, make_user):
    make_user("u1")
    manager = UserManager(db)

    before = manager.get_user("u1").xp
    after = manager.award_xp("u1", 35)

    assert after.xp == before + 35
    assert manager.award_xp("u1", 15).xp == before + 50


@pytest.mark.parametrize("amount", [0, -10, True, 2.5])
def test_award_xp_rejects_non_positive_amounts(db, make_user, amount):
    make_user("u1")
    manager = UserManager(db)

    with pytest.raises(InvalidXPAmountError):
        manager.award_xp("u1", amount)
    assert manager.get_user("u1").xp == 0


def test_award_xp_unknown_user_is_not_found(db):
    with pytest.raises(UserNotFoundError):
        UserManager(db).award_xp("ghost", 10)


def test_ranks_follow_xp_without_gaps(db, make_user):
    for sub in ("a", "b", "c", "d", "e"):
        make_user(sub)
    manager = UserManager(db)
    for sub, amount in [("c", 300), ("a", 100), ("e", 300), ("b", 50), ("a", 500)]:
        manager.award_xp(sub, amount)

    ranked = _ranks_by_xp(db)

    assert [rank for rank, _ in ranked] == [1, 2, 3, 4, 5]
    xps = [xp for _, xp in ranked]
    assert xps == sorted(xps, reverse=True)
    assert manager.get_user("a").rank == 1
    assert manager.get_user("d").rank == 5


def test_tied_users_get_distinct_ranks_in_join_order(db, make_user):
    make_user("first")
    make_user("second")
    manager = UserManager(db)
    manager.award_xp("second", 10)
    manager.award_xp("first", 10)

    assert manager.get_user("first").rank == 1
    assert manager.get_user("second").rank == 2


def test_recompute_only_rewrites_moved_ranks(db, make_user):
    make_user("a")
    make_user("b")
    manager = UserManager(db)

    assert manager.recompute_ranks() == 0
    manager.award_xp("b", 5)
    assert manager.recompute_ranks() == 0


def test_award_survives_failed_rerank(db, make_user, monkeypatch):
    make_user("u1")
    manager = UserManager(db)

    def broken_rerank():
        raise OperationalError("UPDATE users", {}, Exception("database is locked"))

    monkeypatch.setattr(manager, "recompute_ranks", broken_rerank)

    user = manager.award_xp("u1", 40)

    assert user.xp == 40
    assert UserManager(db).get_user("u1").xp == 40


def test_leaderboard_orders_by_xp(db, make_user):
    manager = UserManager(db)
    for sub, xp in [("mid", 500), ("top", 900), ("low", 100)]:
        make_user(sub)
        manager.award_xp(sub, xp)

    leaderboard = manager.get_leaderboard(3)

    assert [u.xp for u in leaderboard] == [900, 500, 100]
    assert [u.rank for u in leaderboard] == [1, 2, 3]
    assert [u.user_id for u in manager.get_leaderboard(2)] == ["top", "mid"]


def test_leaderboard_is_stable_between_reads(db, make_user):
    for sub in ("a", "b", "c"):
        make_user(sub)
    manager = UserManager(db)

    first = [u.user_id for u in manager.get_leaderboard(10)]
    second = [u.user_id for u in manager.get_leaderboard(10)]

    assert first == second
