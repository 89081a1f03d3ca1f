"""Unit tests for automatic substitutions."""

from conftest import build_element_types, build_live, build_squad

from fplive.autosub import apply_auto_subs, find_substitutions
from fplive.constants import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER
from fplive.models import LivePlayerStat, ScoringRules


def by_position(lineup):
    return {p.position: p for p in lineup}


class TestAutoSubs:
    """Tests for the substitution pass."""

    def test_everyone_played_returns_input(self, squad, element_types):
        """Test no subs when all 11 starters have minutes."""
        live = build_live()
        assert apply_auto_subs(squad, live, element_types) == squad

    def test_skips_bench_player_without_minutes(self, squad, element_types):
        """Test starter out, bench 12 on 0', bench 13 on 45' -> 13 comes on."""
        live = build_live({6: {'minutes': 0}, 12: {'minutes': 0}, 13: {'minutes': 45}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[6].element == 13

    def test_bench_priority_order(self, squad, element_types):
        """Test two absent starters are filled by bench 13 then 14."""
        live = build_live({6: {'minutes': 0}, 7: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[6].element == 13
        assert lineup[7].element == 14

    def test_bench_player_never_reused(self, squad, element_types):
        """Test only one playing bench player: second absent starter stays."""
        live = build_live(
            {6: {'minutes': 0}, 7: {'minutes': 0}, 12: {'minutes': 0}, 14: {'minutes': 0}, 15: {'minutes': 0}}
        )
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[6].element == 13
        assert lineup[7].element == 7

    def test_lineup_shape_preserved(self, squad, element_types):
        """Test 15 picks, 11 starters, positions 1-15 after several subs."""
        live = build_live({2: {'minutes': 0}, 6: {'minutes': 0}, 10: {'minutes': 0}})
        lineup = apply_auto_subs(squad, live, element_types)
        assert len(lineup) == 15
        assert len([p for p in lineup if p.position <= 11]) == 11
        assert [p.position for p in lineup] == list(range(1, 16))
        assert len({p.element for p in lineup}) == 15

    def test_replaced_starter_moves_to_bench_slot(self, squad, element_types):
        live = build_live({6: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[13].element == 6

    def test_missing_live_stats_counts_as_zero_minutes(self, squad, element_types):
        live = build_live()
        del live[6]
        live[12] = LivePlayerStat(element=12, minutes=0)
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[6].element == 13

    def test_no_playing_bench_keeps_starter(self, squad, element_types):
        live = build_live({6: {'minutes': 0}}, elements=range(1, 12))
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[6].element == 6

    def test_disabled_returns_picks_unchanged(self, squad, element_types):
        """Test apply_autosubs=False: no swap even with playing bench."""
        live = build_live({6: {'minutes': 0}})
        rules = ScoringRules(apply_autosubs=False)
        assert apply_auto_subs(squad, live, element_types, rules) == squad
        assert find_substitutions(squad, live, element_types, rules) == []

    def test_input_not_mutated(self, squad, element_types):
        original = list(squad)
        live = build_live({9: {'minutes': 0}, 12: {'minutes': 0}})
        apply_auto_subs(squad, live, element_types)
        assert squad == original


class TestCaptaincyTransfer:
    """Tests for captaincy moving with the vacated slot."""

    def test_substitute_inherits_captaincy(self, squad, element_types):
        live = build_live({9: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        sub = lineup[9]
        assert sub.element == 13
        assert sub.is_captain
        assert sub.multiplier == 2

    def test_replaced_captain_loses_armband(self, squad, element_types):
        live = build_live({9: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = apply_auto_subs(squad, live, element_types)
        captains = [p for p in lineup if p.is_captain]
        assert [p.element for p in captains] == [13]

    def test_substitute_inherits_vice_captaincy(self, squad, element_types):
        live = build_live({8: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[8].element == 13
        assert lineup[8].is_vice_captain


class TestFormationConstraints:
    """Tests for formation-legal substitutions."""

    def test_goalkeeper_only_replaced_by_goalkeeper(self, squad, element_types):
        """Test outfield bench players cannot replace an absent keeper."""
        live = build_live({1: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[1].element == 1

    def test_goalkeeper_replaced_by_bench_goalkeeper(self, squad, element_types):
        live = build_live({1: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[1].element == 12

    def test_bench_goalkeeper_cannot_replace_outfielder(self, squad, element_types):
        """Test bench 12 (GKP) skipped for an absent midfielder."""
        live = build_live({6: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[6].element == 13

    def test_minimum_defenders_enforced(self):
        """Test 3-5-2 with a defender out: bench FWD rejected, bench DEF used."""
        roles = {
            GOALKEEPER: (1, 12),
            DEFENDER: (2, 3, 4, 14),
            MIDFIELDER: (5, 6, 7, 8, 9, 15),
            FORWARD: (10, 11, 13),
        }
        squad = build_squad()
        element_types = build_element_types(roles)
        live = build_live({2: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[2].element == 14
        assert lineup[13].element == 13

    def test_maximum_forwards_enforced(self):
        """Test 4-3-3 with a midfielder out: a fourth forward is rejected."""
        roles = {
            GOALKEEPER: (1, 12),
            DEFENDER: (2, 3, 4, 5, 14),
            MIDFIELDER: (6, 7, 8, 15),
            FORWARD: (9, 10, 11, 13),
        }
        squad = build_squad()
        element_types = build_element_types(roles)
        live = build_live({6: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[6].element == 14

    def test_no_legal_substitute_keeps_starter(self):
        """Test 3-5-2 defender out with only a forward playing on the bench."""
        roles = {
            GOALKEEPER: (1, 12),
            DEFENDER: (2, 3, 4, 14),
            MIDFIELDER: (5, 6, 7, 8, 9, 15),
            FORWARD: (10, 11, 13),
        }
        squad = build_squad()
        element_types = build_element_types(roles)
        live = build_live({2: {'minutes': 0}, 12: {'minutes': 0}, 14: {'minutes': 0}, 15: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[2].element == 2

    def test_running_counts_across_subs(self):
        """Test the second sub sees the role change made by the first.

        4-4-2 with two defenders out and only a MID and a FWD playing on the
        bench: the MID replaces the first defender (leaving three), so the
        FWD cannot replace the second.
        """
        squad = build_squad()
        element_types = build_element_types()
        live = build_live({2: {'minutes': 0}, 3: {'minutes': 0}, 12: {'minutes': 0}, 13: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, element_types))
        assert lineup[2].element == 14
        assert lineup[3].element == 3
        assert lineup[15].element == 15

    def test_unknown_roles_default_to_midfielder(self, squad):
        """Test empty role data: like-for-like swaps are always allowed."""
        live = build_live({6: {'minutes': 0}, 12: {'minutes': 0}})
        lineup = by_position(apply_auto_subs(squad, live, {}))
        assert lineup[6].element == 13


class TestFindSubstitutions:
    def test_reports_pairs_in_order(self, squad, element_types):
        live = build_live({6: {'minutes': 0}, 10: {'minutes': 0}, 12: {'minutes': 0}})
        pairs = find_substitutions(squad, live, element_types)
        assert [(out.element, sub.element) for out, sub in pairs] == [(6, 13), (10, 14)]
