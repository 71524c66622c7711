from mismo.services.games.resolution import resolve


def test_pair_and_lone_unique_value():
    # A=3 is the only unique value, so it is both min and max
    result = resolve({'a': 3, 'b': 7, 'c': 7})
    assert result.lives_lost == {'a': 2, 'b': 1, 'c': 1}
    assert result.mismo_values == [7]
    assert result.min_value == 3
    assert result.max_value == 3


def test_pair_between_unique_extremes():
    result = resolve({'a': 1, 'b': 5, 'c': 5, 'd': 9})
    assert result.lives_lost == {'a': 1, 'b': 1, 'c': 1, 'd': 1}
    assert result.min_value == 1
    assert result.max_value == 9


def test_all_unique_only_extremes_lose():
    result = resolve({'a': 4, 'b': 2, 'c': 8, 'd': 5})
    assert result.lives_lost == {'a': 0, 'b': 1, 'c': 1, 'd': 0}
    assert result.mismo_values == []


def test_three_way_tie_is_safe():
    result = resolve({'a': 5, 'b': 5, 'c': 5})
    assert result.lives_lost == {'a': 0, 'b': 0, 'c': 0}
    assert result.min_value is None
    assert result.max_value is None


def test_three_way_tie_does_not_shield_unique_values():
    result = resolve({'a': 5, 'b': 5, 'c': 5, 'd': 0, 'e': 10})
    assert result.lives_lost == {'a': 0, 'b': 0, 'c': 0, 'd': 1, 'e': 1}


def test_only_pairs_means_no_extremes():
    result = resolve({'a': 1, 'b': 1, 'c': 9, 'd': 9})
    assert result.lives_lost == {'a': 1, 'b': 1, 'c': 1, 'd': 1}
    assert result.mismo_values == [1, 9]
    assert result.min_value is None


def test_zero_is_a_real_number():
    result = resolve({'a': 0, 'b': 0, 'c': 4})
    assert result.lives_lost == {'a': 1, 'b': 1, 'c': 2}
    assert result.mismo_values == [0]


def test_pair_holder_is_not_an_extreme_even_if_lowest():
    # 1 is the lowest number overall but it is a mismo, so 3 is the unique min
    result = resolve({'a': 1, 'b': 1, 'c': 3, 'd': 6, 'e': 8})
    assert result.lives_lost == {'a': 1, 'b': 1, 'c': 1, 'd': 0, 'e': 1}


def test_losses_cover_mismo_players_plus_extremes():
    submissions = {'a': 2, 'b': 2, 'c': 4, 'd': 6, 'e': 6, 'f': 6, 'g': 11}
    result = resolve(submissions)
    mismo_players = sum(1 for v in submissions.values() if v in result.mismo_values)
    assert sum(result.lives_lost.values()) >= mismo_players + 2
    assert all(lost >= 0 for lost in result.lives_lost.values())


def test_round_number_and_dict():
    result = resolve({'a': 1, 'b': 2}, round_number=4)
    data = result.to_dict()
    assert data['round'] == 4
    assert data['submissions'] == {'a': 1, 'b': 2}
    assert data['eliminated'] == []
