from neomidi.geometry import Point, Size


def test_point_defaults_to_origin():
    assert Point() == Point(0, 0)


def test_point_unpacks_to_pair():
    point = Point(1.5, -2.0)
    assert tuple(point) == (1.5, -2.0)
    assert list(point) == [1.5, -2.0]


def test_point_round_trip_through_pair():
    pair = (3, 7)
    assert tuple(Point(*pair)) == pair


def test_point_addition_is_componentwise():
    a = Point(1, 2)
    b = Point(10, 20)
    total = a + b
    assert total.x == a.x + b.x
    assert total.y == a.y + b.y


def test_point_in_place_addition():
    point = Point(1, 1)
    point += Point(2, 3)
    assert point == Point(3, 4)


def test_point_addition_with_zero_is_identity():
    point = Point(5.0, 6.0)
    assert point + Point() == point


def test_size_unpacks_to_pair():
    size = Size(100, 50)
    assert tuple(size) == (100, 50)
    assert Size() == Size(0, 0)