from dataclasses import replace

from chameleon_app.config import ChameleonConfig
from chameleon_app.controller import GameController
from chameleon_app.core.event_bus import EventBus
from chameleon_app.services.scheduler import ManualScheduler


def _make(tmp_path, **overrides) -> tuple[GameController, ManualScheduler, list]:
    cfg = replace(ChameleonConfig.defaults(tmp_path), **overrides)
    scheduler = ManualScheduler()
    bus = EventBus()
    seen: list = []
    bus.subscribe("*", seen.append)
    return GameController(config=cfg, scheduler=scheduler, bus=bus), scheduler, seen


def test_new_player_feeds_and_works_chores(tmp_path) -> None:
    controller, _, seen = _make(tmp_path)

    assert controller.initialize_pet("Rex", "veiled") is True
    state = controller.state
    assert state.is_first_time is False
    assert state.finances.balance == 50
    assert state.pet.stats.to_dict() == {"hunger": 75, "happiness": 80, "health": 100, "energy": 85, "cleanliness": 95}
    assert state.pet.mood == "happy"
    assert [b.id for b in state.badges] == ["first_pet"]

    assert controller.perform_action("feed") is True
    state = controller.state
    assert state.finances.balance == 45
    assert state.pet.stats.hunger == 100
    assert state.pet.stats.energy == 90
    assert state.finances.expenses[0].category == "food"
    assert state.finances.expenses[0].amount == 5

    for i in range(10):
        assert controller.earn_money(10, f"chore_{i}") is True

    helpers = [b for b in controller.state.badges if b.id == "hard_worker"]
    assert len(helpers) == 1
    assert helpers[0].name == "Super Helper"
    assert controller.state.finances.balance == 145

    controller.earn_money(10, "chore_10")
    assert sum(1 for b in controller.state.badges if b.id == "hard_worker") == 1

    badge_events = [e for e in seen if e.event_type == "badge_earned"]
    assert [e.payload["badge_id"] for e in badge_events].count("hard_worker") == 1
    assert any(e.message == 'You earned the "Super Helper" badge!' for e in badge_events)


def test_refused_intent_leaves_state_untouched(tmp_path) -> None:
    controller, _, seen = _make(tmp_path)
    controller.initialize_pet("Rex")
    controller.state.finances.balance = 4
    before = controller.state
    snapshot = before.to_dict()

    assert controller.perform_action("feed") is False

    assert controller.state is before
    assert controller.state.to_dict() == snapshot
    assert controller.last_message == "You need $5 but only have $4. Complete chores to earn more!"
    failures = [e for e in seen if e.event_type == "rule_failed"]
    assert failures[-1].payload["kind"] == "insufficient_funds"


def test_exact_balance_is_enough(tmp_path) -> None:
    controller, _, _ = _make(tmp_path)
    controller.initialize_pet("Rex")
    controller.state.finances.balance = 5

    assert controller.perform_action("feed") is True
    assert controller.state.finances.balance == 0
    assert len(controller.state.finances.expenses) == 1


def test_intents_before_a_pet_exists_are_refused(tmp_path) -> None:
    controller, _, _ = _make(tmp_path)

    assert controller.perform_action("feed") is False
    assert controller.teach_trick("Wave") is False
    assert controller.request_service("checkup") is False
    assert controller.state.finances.balance == 50
    assert controller.state.badges == []


def test_reaction_clears_after_delay(tmp_path) -> None:
    controller, scheduler, _ = _make(tmp_path)
    controller.initialize_pet("Rex")

    controller.perform_action("feed")
    assert controller.state.pet.current_reaction == "eating"

    scheduler.advance(1.9)
    assert controller.state.pet.current_reaction == "eating"
    scheduler.advance(0.2)
    assert controller.state.pet.current_reaction is None


def test_newer_reaction_supersedes_pending_clear(tmp_path) -> None:
    controller, scheduler, _ = _make(tmp_path)
    controller.initialize_pet("Rex")

    controller.perform_action("feed")
    scheduler.advance(1)
    controller.perform_action("play")
    assert controller.state.pet.current_reaction == "playing"

    scheduler.advance(1.5)
    assert controller.state.pet.current_reaction == "playing"
    scheduler.advance(1)
    assert controller.state.pet.current_reaction is None
    assert scheduler.pending() == 0


def test_decay_ticks_run_on_schedule(tmp_path) -> None:
    controller, scheduler, seen = _make(tmp_path)
    controller.initialize_pet("Rex")
    controller.start()

    scheduler.advance(30)

    stats = controller.state.pet.stats
    assert stats.hunger == 75 - 6
    assert stats.happiness == 80 - 3
    assert stats.energy == 85 - 3
    assert stats.cleanliness == 95 - 3
    assert stats.health == 100
    assert controller.state.streak_seconds["perfect_health"] == 30
    assert len([e for e in seen if e.event_type == "decay_tick"]) == 3
    controller.stop()


def test_no_decay_before_a_pet_exists(tmp_path) -> None:
    controller, scheduler, seen = _make(tmp_path)
    controller.start()
    scheduler.advance(600)

    assert controller.state.is_first_time is True
    assert controller.state.pet.stats.hunger == 75
    assert controller.state.total_play_minutes == 0
    assert seen == []


def test_pet_grows_up_with_play_time(tmp_path) -> None:
    controller, scheduler, seen = _make(tmp_path, minutes_per_day=1)
    controller.initialize_pet("Rex")
    controller.start()

    scheduler.advance(179)
    assert controller.state.pet.evolution_stage == 1

    scheduler.advance(1)
    pet = controller.state.pet
    assert pet.age == 3
    assert pet.evolution_stage == 2
    assert pet.current_reaction == "celebrating"
    assert controller.state.has_badge("growing_up")
    evolved = [e for e in seen if e.event_type == "evolved"]
    assert [e.payload["stage"] for e in evolved] == [2]

    scheduler.advance(2)
    assert controller.state.pet.current_reaction is None

    scheduler.advance(60)
    assert controller.state.pet.evolution_stage == 2
    assert sum(1 for b in controller.state.badges if b.id == "growing_up") == 1
    controller.stop()


def test_reset_cancels_timers_and_restores_defaults(tmp_path) -> None:
    controller, scheduler, seen = _make(tmp_path)
    controller.initialize_pet("Rex")
    controller.start()
    old_timers = list(controller._timers)
    controller.perform_action("feed")
    assert scheduler.pending() == 4

    controller.reset()

    assert all(not timer.active for timer in old_timers)
    assert scheduler.pending() == 3
    state = controller.state
    assert state.is_first_time is True
    assert state.finances.balance == 50
    assert state.badges == []
    assert state.pet.stats.hunger == 75
    assert seen[-1].event_type == "game_reset"
    assert controller.storage.load().is_first_time is True

    scheduler.advance(60)
    assert controller.state.pet.stats.hunger == 75
    controller.stop()
    assert scheduler.pending() == 0


def test_vet_visits_and_tricks_earn_badges(tmp_path) -> None:
    controller, _, _ = _make(tmp_path)
    controller.initialize_pet("Rex")
    controller.state.finances.balance = 1000

    for _ in range(5):
        assert controller.request_service("checkup") is True
    assert controller.state.has_badge("vet_regular")

    for trick in ("Wave", "Spin", "Hide"):
        assert controller.teach_trick(trick) is True
    assert controller.state.has_badge("trick_master")
    assert controller.state.has_badge("happy_camper")
    assert controller.teach_trick("Color Flash") is False
    assert controller.last_message == "Rex is too tired to learn right now."


def test_listener_failure_does_not_undo_commit(tmp_path, caplog) -> None:
    controller, _, _ = _make(tmp_path)

    def _explode(_event) -> None:
        raise RuntimeError("listener bug")

    controller.bus.subscribe("action_done", _explode)
    assert controller.initialize_pet("Rex") is True
    assert controller.state.pet.name == "Rex"
    assert "event handler failed" in caplog.text


def test_malformed_earn_amounts_are_refused(tmp_path) -> None:
    controller, _, seen = _make(tmp_path)
    controller.initialize_pet("Rex")
    before = controller.state
    snapshot = before.to_dict()

    for bad in (None, "ten", float("nan"), float("inf"), 7.9):
        assert controller.earn_money(bad, "dishes") is False

    assert controller.state is before
    assert controller.state.to_dict() == snapshot
    kinds = [e.payload["kind"] for e in seen if e.event_type == "rule_failed"]
    assert kinds == ["validation"] * 5


def test_whole_float_amount_is_credited_exactly(tmp_path) -> None:
    controller, _, _ = _make(tmp_path)
    controller.initialize_pet("Rex")

    assert controller.earn_money(8.0, "dishes") is True
    assert controller.state.finances.balance == 58
    assert controller.last_message == "You earned $8!"
