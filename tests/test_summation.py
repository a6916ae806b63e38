import pytest

import sum_to_n
from crud_api.app.services.summation import sum_to_n_a, sum_to_n_b, sum_to_n_c

IMPLEMENTATIONS = [sum_to_n_a, sum_to_n_b, sum_to_n_c]


@pytest.mark.parametrize("n", [0, 1, 5, 100])
def test_implementations_agree(n):
    expected = n * (n + 1) // 2
    assert [func(n) for func in IMPLEMENTATIONS] == [expected] * 3


@pytest.mark.parametrize("func", IMPLEMENTATIONS)
def test_negative_n_is_rejected(func):
    with pytest.raises(ValueError):
        func(-1)


def test_cli_prints_all_three(capsys):
    assert sum_to_n.main(["100"]) == 0
    out = capsys.readouterr().out
    assert out.count("= 5050") == 3
