def test_created_session_resolves(sessions, sessions_collection):
    sid = sessions.create("A")
    assert sessions.resolve(sid) == "A"
    assert sessions_collection.docs[0]["sid"] == sid


def test_each_login_gets_a_new_sid(sessions):
    assert sessions.create("A") != sessions.create("A")


def test_unknown_or_missing_sid(sessions):
    sessions.create("A")
    assert sessions.resolve("forged") is None
    assert sessions.resolve(None) is None
