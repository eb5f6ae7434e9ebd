"""
Tests for the account store.
"""
import threading
import pytest
from bson import ObjectId
from jukeboxd.core.errors import (
    ConflictError,
    ErrorKind,
    InputValidationError,
    InvalidCredentialsError,
    NotFoundError,
)
from jukeboxd.core.security import verify_password
from jukeboxd.services import post_service, user_service
from jukeboxd.tests.conftest import PASSWORD

MISSING_ID = str(ObjectId())


def test_create_user_round_trip(db, make_user):
    created = make_user("Alice", email="alice@example.com", bio="Jazz head", profile_picture="vinyl.png")
    fetched = user_service.get_user_by_id(created["id"], db)

    assert fetched["username"] == "Alice"
    assert fetched["email"] == "alice@example.com"
    assert fetched["bio"] == "Jazz head"
    assert fetched["profilePicture"] == "vinyl.png"
    assert fetched["hashedPassword"] != PASSWORD
    assert verify_password(PASSWORD, fetched["hashedPassword"])
    for field in ["userPosts", "userComments", "following", "followers"]:
        assert fetched[field] == []


def test_create_user_normalizes_email(db, make_user):
    created = make_user("Alice", email="  Alice@Example.COM ")
    assert created["email"] == "alice@example.com"


def test_create_user_duplicate_email_case_insensitive(db, make_user):
    make_user("Alice", email="alice@example.com")
    with pytest.raises(ConflictError) as exc_info:
        make_user("Alicia", email="ALICE@example.com")
    assert exc_info.value.kind == ErrorKind.CONFLICT
    assert db.users.count_documents({}) == 1


def test_create_user_validates_input(db, make_user):
    with pytest.raises(InputValidationError):
        make_user("R2D2")
    with pytest.raises(InputValidationError):
        make_user("Alice", password="short")
    with pytest.raises(InputValidationError):
        make_user("Alice", profile_picture="not-there.png")
    assert db.users.count_documents({}) == 0


def test_get_all_users_projects_id_and_username(make_user, db):
    make_user("Alice")
    make_user("Bob")
    everyone = user_service.get_all_users(db)
    assert sorted(u["username"] for u in everyone) == ["Alice", "Bob"]
    for user in everyone:
        assert set(user) == {"id", "username"}


def test_get_user_by_id_errors(db):
    with pytest.raises(NotFoundError, match="No user with that id"):
        user_service.get_user_by_id(MISSING_ID, db)
    with pytest.raises(InputValidationError):
        user_service.get_user_by_id("not-an-object-id", db)


def test_follow_user_is_symmetric_and_idempotent(make_user, db):
    alice = make_user("Alice")
    bob = make_user("Bob")

    user_service.follow_user(alice["id"], bob["id"], db)
    user_service.follow_user(alice["id"], bob["id"], db)

    assert user_service.get_user_by_id(alice["id"], db)["following"] == [bob["id"]]
    assert user_service.get_user_by_id(bob["id"], db)["followers"] == [alice["id"]]

    user_service.unfollow_user(alice["id"], bob["id"], db)
    assert user_service.get_user_by_id(alice["id"], db)["following"] == []
    assert user_service.get_user_by_id(bob["id"], db)["followers"] == []


def test_follow_user_missing_endpoint_mutates_nothing(make_user, db):
    alice = make_user("Alice")
    with pytest.raises(NotFoundError):
        user_service.follow_user(alice["id"], MISSING_ID, db)
    assert user_service.get_user_by_id(alice["id"], db)["following"] == []


def test_follow_self_rejected(make_user, db):
    alice = make_user("Alice")
    with pytest.raises(InputValidationError):
        user_service.follow_user(alice["id"], alice["id"], db)


def test_update_followers_and_following(make_user, db):
    alice = make_user("Alice")
    bob = make_user("Bob")
    updated = user_service.update_followers(alice["id"], bob["id"], db)
    assert updated["followers"] == [bob["id"]]
    updated = user_service.update_following(bob["id"], alice["id"], db)
    assert updated["following"] == [alice["id"]]


def test_update_followers_missing_target(make_user, db):
    bob = make_user("Bob")
    before = list(db.users.find({}))
    with pytest.raises(NotFoundError, match="Could not follow user"):
        user_service.update_followers(MISSING_ID, bob["id"], db)
    with pytest.raises(NotFoundError):
        user_service.update_following(MISSING_ID, bob["id"], db)
    assert list(db.users.find({})) == before


def test_remove_user_cascades(make_user, db):
    alice = make_user("Alice")
    bob = make_user("Bob")
    carol = make_user("Carol")
    user_service.follow_user(alice["id"], bob["id"], db)
    user_service.follow_user(carol["id"], alice["id"], db)

    post = post_service.create_post(alice["id"], "So What", "Miles Davis", "Timeless", db)
    bobs_post = post_service.create_post(bob["id"], "Naima", "John Coltrane", "Gorgeous", db)
    post_service.add_comment(post["id"], bob["id"], "Agreed", db)
    alice_comment = post_service.add_comment(bobs_post["id"], alice["id"], "Lovely", db)

    result = user_service.remove_user(alice["id"], db)

    assert result == {"userName": "Alice", "deleted": True}
    bob_after = user_service.get_user_by_id(bob["id"], db)
    carol_after = user_service.get_user_by_id(carol["id"], db)
    assert alice["id"] not in bob_after["followers"]
    assert alice["id"] not in carol_after["following"]
    assert db.posts.count_documents({"user_id": ObjectId(alice["id"])}) == 0
    assert bob_after["userComments"] == []
    assert alice_comment["id"] not in post_service.get_post_by_id(bobs_post["id"], db)["comments"]
    with pytest.raises(NotFoundError):
        user_service.get_user_by_id(alice["id"], db)


def test_remove_user_missing(db):
    with pytest.raises(NotFoundError):
        user_service.remove_user(MISSING_ID, db)


def test_update_user_put(make_user, db):
    alice = make_user("Alice")
    bob = make_user("Bob")
    post_id, comment_id = str(ObjectId()), str(ObjectId())

    updated = user_service.update_user_put(alice["id"], post_id, comment_id, bob["id"], db)

    assert updated["userPosts"] == [post_id]
    assert updated["userComments"] == [comment_id]
    assert updated["following"] == [bob["id"]]
    assert user_service.get_user_by_id(bob["id"], db)["followers"] == [alice["id"]]


def test_update_user_put_missing_user(db):
    with pytest.raises(NotFoundError):
        user_service.update_user_put(MISSING_ID, None, None, None, db)


def test_update_user_patch_merges_fields(make_user, db):
    alice = make_user("Alice", bio="Old bio")
    updated = user_service.update_user_patch(alice["id"], {"bio": "  New bio "}, db)
    assert updated["bio"] == "New bio"
    assert updated["username"] == "Alice"
    assert updated["profilePicture"] == "vinyl.png"


def test_update_user_patch_password_is_rehashed(make_user, db):
    alice = make_user("Alice")
    user_service.update_user_patch(alice["id"], {"password": "N3w!Password"}, db)
    assert user_service.login_user("alice@example.com", "N3w!Password", db)["username"] == "Alice"
    with pytest.raises(InvalidCredentialsError):
        user_service.login_user("alice@example.com", PASSWORD, db)


def test_update_user_patch_rejects_bad_input(make_user, db):
    alice = make_user("Alice")
    make_user("Bob")
    with pytest.raises(InputValidationError):
        user_service.update_user_patch(alice["id"], {}, db)
    with pytest.raises(InputValidationError, match="hashedPassword"):
        user_service.update_user_patch(alice["id"], {"hashedPassword": "x"}, db)
    with pytest.raises(ConflictError):
        user_service.update_user_patch(alice["id"], {"email": "BOB@example.com"}, db)


def test_update_user_patch_missing_user(db):
    with pytest.raises(NotFoundError, match="Could not update user"):
        user_service.update_user_patch(MISSING_ID, {"bio": "hello"}, db)


def test_login_user(make_user, db):
    make_user("Alice", email="alice@example.com")
    profile = user_service.login_user("ALICE@example.com", PASSWORD, db)
    assert profile["username"] == "Alice"
    assert profile["email"] == "alice@example.com"
    assert profile["hashedPassword"] != PASSWORD


def test_login_user_does_not_reveal_which_field_is_wrong(make_user, db):
    make_user("Alice", email="alice@example.com")
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        user_service.login_user("alice@example.com", "Wr0ng!Pass", db)
    with pytest.raises(InvalidCredentialsError) as wrong_email:
        user_service.login_user("nobody@example.com", PASSWORD, db)
    assert wrong_password.value.message == wrong_email.value.message
    assert wrong_password.value.kind == wrong_email.value.kind


def test_login_user_with_surrounding_whitespace(make_user, db):
    make_user("Alice", email="alice@example.com", password="  Sup3r$ecret  ")
    profile = user_service.login_user("alice@example.com", "  Sup3r$ecret  ", db)
    assert profile["username"] == "Alice"
    assert user_service.login_user("alice@example.com", PASSWORD, db)["username"] == "Alice"


def test_update_user_put_missing_friend_leaves_user_unchanged(make_user, db):
    alice = make_user("Alice")
    with pytest.raises(NotFoundError):
        user_service.update_user_put(alice["id"], str(ObjectId()), str(ObjectId()), MISSING_ID, db)
    assert user_service.get_user_by_id(alice["id"], db) == alice


def test_update_user_put_self_friend_leaves_user_unchanged(make_user, db):
    alice = make_user("Alice")
    with pytest.raises(InputValidationError):
        user_service.update_user_put(alice["id"], str(ObjectId()), None, alice["id"], db)
    assert user_service.get_user_by_id(alice["id"], db)["userPosts"] == []


def test_get_all_users_empty(db):
    assert user_service.get_all_users(db) == []


def test_remove_user_clears_one_sided_edges(make_user, db):
    alice = make_user("Alice")
    bob = make_user("Bob")
    # edge recorded only on Bob's side
    user_service.update_followers(bob["id"], alice["id"], db)

    user_service.remove_user(alice["id"], db)

    assert user_service.get_user_by_id(bob["id"], db)["followers"] == []


def test_remove_user_waits_for_relationship_lock(make_user, db):
    alice = make_user("Alice")
    worker = threading.Thread(target=user_service.remove_user, args=(alice["id"], db))

    with user_service._relationship_lock:
        worker.start()
        worker.join(timeout=0.2)
        assert worker.is_alive()
        assert db.users.count_documents({"_id": ObjectId(alice["id"])}) == 1

    worker.join(timeout=5)
    assert not worker.is_alive()
    assert db.users.count_documents({"_id": ObjectId(alice["id"])}) == 0
