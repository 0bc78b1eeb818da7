"""箭头几何测试"""
import pytest

from core.arrows import ArrowRelation, Arrows, Direction, NEIGHBOR_ORDER


class TestDirection:
    """方向测试"""

    def test_neighbor_order(self):
        assert NEIGHBOR_ORDER == (
            Direction.WEST,
            Direction.EAST,
            Direction.NORTH,
            Direction.NORTHWEST,
            Direction.NORTHEAST,
            Direction.SOUTH,
            Direction.SOUTHWEST,
            Direction.SOUTHEAST,
        )

    def test_bits(self):
        assert Direction.NORTH.bit == 0x80
        assert Direction.NORTHEAST.bit == 0x40
        assert Direction.EAST.bit == 0x20
        assert Direction.SOUTHEAST.bit == 0x10
        assert Direction.SOUTH.bit == 0x08
        assert Direction.SOUTHWEST.bit == 0x04
        assert Direction.WEST.bit == 0x02
        assert Direction.NORTHWEST.bit == 0x01

    def test_bits_are_distinct(self):
        assert sum(d.bit for d in Direction) == 0xFF

    @pytest.mark.parametrize("direction", list(Direction))
    def test_opposite_is_involution(self, direction):
        assert direction.opposite.opposite is direction
        assert direction.opposite is not direction

    @pytest.mark.parametrize("direction", list(Direction))
    def test_opposite_offset_is_negated(self, direction):
        dr, dc = direction.offset
        assert direction.opposite.offset == (-dr, -dc)


class TestArrows:
    """掩码测试"""

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            Arrows(256)
        with pytest.raises(ValueError):
            Arrows(-1)

    def test_from_directions(self):
        arrows = Arrows.from_directions([Direction.NORTH, Direction.WEST])
        assert arrows.flags == 0x82
        assert arrows.directions == (Direction.WEST, Direction.NORTH)
        assert arrows.count == 2

    def test_empty_mask_is_truthy(self):
        assert Arrows()
        assert Arrows().count == 0

    def test_with_arrow(self):
        arrows = Arrows().with_arrow(Direction.EAST)
        assert arrows.has(Direction.EAST)
        assert not arrows.with_arrow(Direction.EAST, False).has(Direction.EAST)

    def test_all(self):
        assert all(Arrows.all().has(d) for d in Direction)


class TestRelation:
    """关系真值表测试"""

    @pytest.mark.parametrize("direction", list(Direction))
    @pytest.mark.parametrize("attack,defend,expected", [
        (True, True, ArrowRelation.BATTLE),
        (True, False, ArrowRelation.TAKE),
        (False, True, ArrowRelation.IGNORE),
        (False, False, ArrowRelation.IGNORE),
    ])
    def test_truth_table(self, direction, attack, defend, expected):
        mine = Arrows().with_arrow(direction, attack)
        theirs = Arrows().with_arrow(direction.opposite, defend)
        assert mine.relation_from(direction, theirs) is expected

    def test_defender_arrow_must_point_back(self):
        mine = Arrows.from_directions([Direction.NORTH])
        # 指向北方而非南方的箭头不构成战斗
        theirs = Arrows.from_directions([Direction.NORTH])
        assert mine.relation_from(Direction.NORTH, theirs) is ArrowRelation.TAKE
