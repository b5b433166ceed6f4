import random
from pathlib import Path

import pytest

from wordscramble.config import DEFAULT_ROOT_WORD
from wordscramble.game_logic import (
    Accepted,
    GameState,
    Rejected,
    RejectionReason,
    RootWordSourceError,
    WordGame,
    clear_accepted,
    is_composable,
    load_root_word_pool,
    new_game,
    new_round,
    parse_root_word_pool,
    pick_root_word,
    submit,
)


def listen_state(**kwargs) -> GameState:
    return GameState(root_word="listen", root_word_pool=("listen", "silkworm"), **kwargs)


def test_composable_word_is_accepted(oracle):
    state, result = submit(listen_state(), "silt", oracle)
    assert isinstance(result, Accepted)
    assert result.word == "silt"
    assert result.points == 4
    assert state.accepted_words == ("silt",)
    assert state.score == 4


def test_letter_reuse_limited_to_root_occurrences(oracle):
    # "ssilt" needs two s's, "listen" only has one
    oracle_with_word = type(oracle)(["ssilt"])
    state, result = submit(listen_state(), "ssilt", oracle_with_word)
    assert isinstance(result, Rejected)
    assert result.reason is RejectionReason.NOT_COMPOSABLE
    assert result.message == 'This word is not possible from "listen"'
    assert state == listen_state()


def test_is_composable_multiset_law():
    assert is_composable("silt", "listen")
    assert is_composable("tinsel", "listen")
    assert not is_composable("ssilt", "listen")
    assert not is_composable("cat", "listen")
    assert is_composable("", "listen")
    assert is_composable("worms", "silkworms")
    assert is_composable("skims", "silkworms")
    assert not is_composable("kisses", "silkworms")


def test_identical_to_root_wins_over_other_checks(oracle):
    # "listen" is real and trivially composable from itself
    state, result = submit(listen_state(), "  LISTEN\n", oracle)
    assert result.reason is RejectionReason.IDENTICAL_TO_ROOT
    assert result.title == "Word is the same!"
    assert state.accepted_words == ()


def test_empty_and_unknown_words_are_not_real(oracle):
    _, result = submit(listen_state(), "   ", oracle)
    assert result.reason is RejectionReason.NOT_A_REAL_WORD
    _, result = submit(listen_state(), "nilst", oracle)
    assert result.reason is RejectionReason.NOT_A_REAL_WORD
    assert result.message == "This must be a real word!"


def test_real_word_check_runs_before_composability(oracle):
    # Neither real nor composable: reported as not real
    _, result = submit(listen_state(), "zzz", oracle)
    assert result.reason is RejectionReason.NOT_A_REAL_WORD
    # Real but not composable
    _, result = submit(listen_state(), "cat", oracle)
    assert result.reason is RejectionReason.NOT_COMPOSABLE


@pytest.mark.parametrize("variant", ["silt", "SILT", "  Silt ", "silt\n"])
def test_resubmission_is_already_used(oracle, variant):
    state, _ = submit(listen_state(), "silt", oracle)
    after, result = submit(state, variant, oracle)
    assert result.reason is RejectionReason.ALREADY_USED
    assert result.title == "Word already exists!"
    assert after is state


def test_rejection_is_idempotent(oracle):
    state, _ = submit(listen_state(), "tin", oracle)
    first_state, first = submit(state, "cat", oracle)
    second_state, second = submit(first_state, "cat", oracle)
    assert first.reason == second.reason == RejectionReason.NOT_COMPOSABLE
    assert first_state == second_state == state


def test_score_is_sum_of_accepted_lengths(oracle):
    state = listen_state()
    for word in ["silt", "tin", "enlist", "net"]:
        state, result = submit(state, word, oracle)
        assert result.accepted
    assert state.accepted_words == ("net", "enlist", "tin", "silt")
    assert state.score == sum(len(w) for w in state.accepted_words) == 16


def test_new_round_resets_score_and_words(oracle, rng):
    state, _ = submit(listen_state(), "silt", oracle)
    state = new_round(state, rng)
    assert state.root_word in ("listen", "silkworm")
    assert state.score == 0
    assert state.accepted_words == ()
    assert state.root_word_pool == ("listen", "silkworm")


def test_clear_accepted_keeps_root_and_score(oracle):
    state, _ = submit(listen_state(), "silt", oracle)
    cleared = clear_accepted(state)
    assert cleared.accepted_words == ()
    assert cleared.root_word == "listen"
    assert cleared.score == 4
    # Cleared words can be played again
    _, result = submit(cleared, "silt", oracle)
    assert result.accepted


def test_pick_root_word_from_pool(rng):
    pool = ["listen", "silkworm", "alphabet"]
    for _ in range(20):
        assert pick_root_word(pool, rng) in pool
    assert pick_root_word(pool) in pool


def test_pick_root_word_is_deterministic_with_seed():
    pool = ["listen", "silkworm", "alphabet", "calendar"]
    first = [pick_root_word(pool, random.Random(7)) for _ in range(3)]
    second = [pick_root_word(pool, random.Random(7)) for _ in range(3)]
    assert first == second


def test_empty_pool_falls_back_to_default(rng):
    assert pick_root_word([], rng) == DEFAULT_ROOT_WORD == "silkworm"
    assert new_game([], rng).root_word == "silkworm"


def test_parse_root_word_pool():
    assert parse_root_word_pool("listen\nSilkworm\r\n\n  alphabet \n") == ["listen", "silkworm", "alphabet"]
    assert parse_root_word_pool("") == []


def test_load_root_word_pool(tmp_path: Path):
    source = tmp_path / "start.txt"
    source.write_text("listen\nsilkworm\n", encoding="utf-8")
    assert load_root_word_pool(source) == ["listen", "silkworm"]


def test_missing_root_word_source_is_fatal(tmp_path: Path):
    with pytest.raises(RootWordSourceError):
        load_root_word_pool(tmp_path / "missing.txt")


def test_undecodable_root_word_source_is_fatal(tmp_path: Path):
    source = tmp_path / "start.txt"
    source.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(RootWordSourceError):
        load_root_word_pool(source)


def test_bundled_root_words_load():
    from wordscramble.config import DATA_DIR

    pool = load_root_word_pool(DATA_DIR / "start.txt")
    assert "silkworm" in pool
    assert all(word == word.strip().lower() and word for word in pool)


def test_word_game_session(oracle):
    game = WordGame(["listen"], oracle)
    assert game.root_word == "listen"
    assert game.submit("silt").accepted
    assert not game.submit("silt").accepted
    assert game.accepted_words == ("silt",)
    assert game.score == 4

    game.clear_accepted()
    assert game.accepted_words == ()
    assert game.score == 4

    assert game.new_word() == "listen"
    assert game.score == 0
