from typing import Optional

from ...core.data import Team
from ..ai.enemy_planner import AIDecision, EnemyPlanner
from .base import TacticalState, TacticalStateId


class EnemyTurnState(TacticalState):
    """Moves the enemy side one unit per visit, without player input."""

    state_id = TacticalStateId.ENEMY_TURN

    def __init__(self, controller):
        super().__init__(controller)
        self.planner = EnemyPlanner()
        self.decision: Optional[AIDecision] = None
        self.done = False

    def enter(self, previous: Optional[TacticalStateId]) -> None:
        self.decision = None
        self.done = False
        self.clear_highlights()
        self.controller.menu.hide()

    def exit(self) -> None:
        self.decision = None

    def update(self) -> None:
        if self.decision is not None or self.done or self.controller.is_battle_over:
            return

        game_map = self.controller.game_map
        unit = self.planner.next_unit(game_map.get_units_by_team(self.controller.current_team))
        if unit is None:
            self.done = True
            return

        self.controller.select_unit(unit)
        opponents = game_map.get_units_by_team(Team.PLAYER if unit.team == Team.ENEMY else Team.ENEMY)
        self.decision = self.planner.decide(unit, opponents, unit.available_paths)
        self.log(f"{unit.name}: {self.decision.reasoning}", "AI")

    def transition(self) -> None:
        if self.done:
            self.done = False
            self.controller.end_turn()
            return
        if self.decision is None:
            return

        decision, self.decision = self.decision, None
        if decision.moves:
            self.controller.move_unit_path(decision.unit, decision.path)
        else:
            self.controller.end_turn()
