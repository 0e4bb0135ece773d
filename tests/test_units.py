from sc2botkit.geometry import Point, Point2D
from sc2botkit.models import RawUnit, UnitOrder, UnitTypeData
from sc2botkit.unit import Unit
from sc2botkit.units import Units


def make_units():
    specs = [
        dict(tag=1, pos=Point(0.0, 0.0), energy=10.0, build_progress=1.0),
        dict(tag=2, pos=Point(4.0, 0.0), energy=60.0, build_progress=0.5, buff_ids=[7]),
        dict(tag=3, pos=Point(0.0, 8.0), energy=0.0, build_progress=0.0,
             orders=[UnitOrder(ability_id=3)]),
        dict(tag=4, pos=Point(2.0, 2.0), energy=50.0, build_progress=1.0, buff_ids=[7, 8]),
    ]
    return [Unit(RawUnit(**s), UnitTypeData()) for s in specs]


def test_len_iter_and_tags():
    units = Units(make_units())
    assert len(units) == 4
    assert units.tags() == [1, 2, 3, 4]
    assert [u.tag for u in units] == [1, 2, 3, 4]
    assert not Units()


def test_choose_chains_and_drop_complements():
    units = Units(make_units())
    chosen = units.choose(lambda u: u.tag > 1).choose(lambda u: u.tag < 4)
    assert chosen.tags() == [2, 3]
    assert len(chosen) == 2
    dropped = units.drop(lambda u: u.tag > 1)
    assert dropped.tags() == [1]


def test_choose_is_lazy():
    raw = make_units()
    rich = Units(raw).has_energy(50.0)
    assert rich.tags() == [2, 4]
    raw[0].raw.energy = 99.0
    assert rich.tags() == [1, 2, 4]


def test_partition():
    chosen, dropped = Units(make_units()).partition(lambda u: u.tag % 2 == 0)
    assert chosen.tags() == [2, 4]
    assert dropped.tags() == [1, 3]


def test_first():
    units = Units(make_units())
    assert units.first().tag == 1
    assert units.choose(lambda u: u.tag == 3).first().tag == 3
    assert not units.choose(lambda u: False).first()


def test_closest_to_and_closer_than():
    units = Units(make_units())
    assert units.closest_to(Point2D(3.0, 0.0)).tag == 2
    assert not Units().closest_to(Point2D())
    assert units.closer_than(4.0, Point2D(0.0, 0.0)).tags() == [1, 2, 4]
    assert units.closer_than(3.9, Point2D(0.0, 0.0)).tags() == [1, 4]


def test_center():
    units = Units(make_units()).tagged({1, 2})
    assert units.center() == Point2D(2.0, 0.0)
    assert Units().center() == Point2D()


def test_concat():
    base = Units(make_units())
    a = base.tagged({1})
    b = base.tagged({3, 4})
    assert a.concat(b).tags() == [1, 3, 4]
    assert Units().concat(b).tags() == [3, 4]


def test_tagged_with_set_and_mapping():
    units = Units(make_units())
    assert units.tagged({2, 4}).tags() == [2, 4]
    assert units.not_tagged({2, 4}).tags() == [1, 3]
    assert units.tagged({2: True, 4: False}).tags() == [2]
    assert units.not_tagged({2: True, 4: False}).tags() == [1, 3, 4]


def test_buffs():
    units = Units(make_units())
    assert units.has_buff(7).tags() == [2, 4]
    assert units.no_buff(8).tags() == [1, 2, 3]


def test_state_filters():
    units = Units(make_units())
    assert units.is_started().tags() == [1, 2, 4]
    assert units.is_built().tags() == [1, 4]
    assert units.is_idle().tags() == [1, 2, 4]


def test_each_while_and_until():
    units = Units(make_units())
    seen = []

    def below_three(u):
        seen.append(u.tag)
        return u.tag < 3

    assert units.each_while(below_three) is False
    assert seen == [1, 2, 3]

    seen.clear()
    assert units.each_until(lambda u: seen.append(u.tag) or u.tag == 2) is True
    assert seen == [1, 2]

    assert units.each_while(lambda u: True) is True
    assert units.each_until(lambda u: False) is False