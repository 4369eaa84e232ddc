"""
Unit tests for the menu model.
"""
from tactics.core.data import Team
from tactics.game.entities.skills import SkillData
from tactics.game.entities.unit import Unit
from tactics.game.menu import TacticalMenu, MenuKind, MenuOption


class TestTacticalMenu:
    """Test menu contents for different unit states."""

    def test_main_menu_labels(self):
        menu = TacticalMenu()
        menu.show_main_menu(Unit("Knight", Team.PLAYER, skills=[SkillData("Slash")]))

        assert menu.is_visible
        assert menu.kind == MenuKind.MAIN
        assert menu.labels() == ["Move", "Skills", "Items", "Status", "End Turn"]
        assert all(item.enabled for item in menu.items)

    def test_spent_options_disabled(self):
        unit = Unit("Knight", Team.PLAYER, skills=[SkillData("Slash")])
        unit.movement_done = True
        menu = TacticalMenu()
        menu.show_main_menu(unit)

        assert not menu.items[MenuOption.MOVE.value].enabled
        assert menu.items[MenuOption.SKILLS.value].enabled

    def test_skills_disabled_without_skills(self):
        menu = TacticalMenu()
        menu.show_main_menu(Unit("Peasant", Team.PLAYER))

        assert not menu.items[MenuOption.SKILLS.value].enabled

    def test_skill_menu_and_hide(self):
        menu = TacticalMenu()
        menu.show_skill_menu(Unit("Ranger", Team.PLAYER, skills=[SkillData("Arrow"), SkillData("Mend")]))

        assert menu.kind == MenuKind.SKILLS
        assert menu.labels() == ["Arrow", "Mend"]

        menu.hide()
        assert not menu.is_visible
        assert menu.items == []
