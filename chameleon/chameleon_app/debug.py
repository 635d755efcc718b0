from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime, timezone

from chameleon_app.config import ChameleonConfig
from chameleon_app.controller import GameController
from chameleon_app.core import catalog
from chameleon_app.services.ledger import chore_cooldown_remaining
from chameleon_app.services.scheduler import ManualScheduler
from chameleon_app.ui.renderer import Renderer


def _controller() -> tuple[GameController, ManualScheduler]:
    cfg = ChameleonConfig.from_env()
    scheduler = ManualScheduler(start=datetime.now(tz=timezone.utc))
    return GameController(config=cfg, scheduler=scheduler), scheduler


def _print_result(controller: GameController, ok: bool) -> int:
    print(json.dumps({"ok": ok, "message": controller.last_message}, ensure_ascii=False))
    return 0 if ok else 1


def _status_payload(controller: GameController) -> dict:
    state = controller.state
    renderer = Renderer()
    now = controller.scheduler.now()
    return {
        "sprite": renderer.sprite_for(state),
        "status": renderer.status_line(state),
        "is_first_time": state.is_first_time,
        "pet": state.pet.to_dict(),
        "finances": {
            **state.finances.to_dict(),
            "expenses": len(state.finances.expenses),
            "savings_progress": state.finances.savings_progress,
        },
        "badges": [badge.name for badge in state.badges],
        "completed_chores": len(state.completed_chores),
        "chore_cooldowns_min": {
            chore_id: int(chore_cooldown_remaining(state, chore_id, now).total_seconds() // 60)
            for chore_id in catalog.CHORES
        },
        "total_play_minutes": state.total_play_minutes,
        "last_updated": state.last_updated.isoformat(),
    }


def _cmd_status(_args: argparse.Namespace) -> int:
    controller, _ = _controller()
    print(json.dumps(_status_payload(controller), ensure_ascii=False, indent=2))
    return 0


def _cmd_config(_args: argparse.Namespace) -> int:
    cfg = ChameleonConfig.from_env()
    payload = {
        "data_dir": str(cfg.data_dir),
        "state_path": str(cfg.state_path),
        "decay_seconds": cfg.decay_seconds,
        "playtime_seconds": cfg.playtime_seconds,
        "growth_check_seconds": cfg.growth_check_seconds,
        "reaction_seconds": cfg.reaction_seconds,
        "minutes_per_day": cfg.minutes_per_day,
        "log_level": cfg.log_level,
        "debug": cfg.debug,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    controller, _ = _controller()
    return _print_result(controller, controller.initialize_pet(args.name, args.species))


def _cmd_act(args: argparse.Namespace) -> int:
    controller, _ = _controller()
    return _print_result(controller, controller.perform_action(args.action))


def _cmd_vet(args: argparse.Namespace) -> int:
    controller, _ = _controller()
    return _print_result(controller, controller.request_service(args.service))


def _cmd_trick(args: argparse.Namespace) -> int:
    controller, _ = _controller()
    return _print_result(controller, controller.teach_trick(args.name))


def _cmd_chore(args: argparse.Namespace) -> int:
    controller, _ = _controller()
    return _print_result(controller, controller.complete_chore(args.chore))


def _cmd_earn(args: argparse.Namespace) -> int:
    controller, _ = _controller()
    return _print_result(controller, controller.earn_money(args.amount, args.source))


def _cmd_temp(args: argparse.Namespace) -> int:
    controller, _ = _controller()
    return _print_result(controller, controller.set_temperature(args.value))


def _cmd_tick(args: argparse.Namespace) -> int:
    controller, scheduler = _controller()
    controller.start()
    scheduler.advance(max(0, int(args.n)) * controller.config.decay_seconds)
    controller.stop()
    print(Renderer().status_line(controller.state))
    return 0


def _cmd_reset(_args: argparse.Namespace) -> int:
    controller, _ = _controller()
    controller.reset()
    return _print_result(controller, True)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="python -m chameleon_app.debug")
    parser.add_argument("--verbose", action="store_true", help="log to stderr")
    subparsers = parser.add_subparsers(dest="cmd", required=True)

    p_status = subparsers.add_parser("status", help="Show the saved game state")
    p_status.set_defaults(func=_cmd_status)

    p_config = subparsers.add_parser("config", help="Show effective config")
    p_config.set_defaults(func=_cmd_config)

    p_init = subparsers.add_parser("init", help="Create a pet")
    p_init.add_argument("name")
    p_init.add_argument("--species", default="veiled", choices=sorted(catalog.SPECIES))
    p_init.set_defaults(func=_cmd_init)

    p_act = subparsers.add_parser("act", help="Perform a care action")
    p_act.add_argument("action", help=", ".join(catalog.CARE_ACTIONS))
    p_act.set_defaults(func=_cmd_act)

    p_vet = subparsers.add_parser("vet", help="Book a vet service")
    p_vet.add_argument("service", help=", ".join(catalog.VET_SERVICES))
    p_vet.set_defaults(func=_cmd_vet)

    p_trick = subparsers.add_parser("trick", help="Teach a trick")
    p_trick.add_argument("name", help="e.g. " + ", ".join(catalog.TRICKS))
    p_trick.set_defaults(func=_cmd_trick)

    p_chore = subparsers.add_parser("chore", help="Complete a chore")
    p_chore.add_argument("chore", help=", ".join(catalog.CHORES))
    p_chore.set_defaults(func=_cmd_chore)

    p_earn = subparsers.add_parser("earn", help="Credit money directly")
    p_earn.add_argument("amount", type=int)
    p_earn.add_argument("--source", default="manual")
    p_earn.set_defaults(func=_cmd_earn)

    p_temp = subparsers.add_parser("temp", help="Set the tank temperature (F)")
    p_temp.add_argument("value", type=float)
    p_temp.set_defaults(func=_cmd_temp)

    p_tick = subparsers.add_parser("tick", help="Fast-forward decay ticks on a virtual clock")
    p_tick.add_argument("--n", type=int, default=1)
    p_tick.set_defaults(func=_cmd_tick)

    p_reset = subparsers.add_parser("reset", help="Start over")
    p_reset.set_defaults(func=_cmd_reset)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
