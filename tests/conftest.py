import random

import pytest

from decision_optimization.truth_tables import DC_INPUT_STRING


@pytest.fixture
def random_tables():
    """Seeded tables of 1-3 inputs over a small value alphabet, some with don't-cares."""
    rng = random.Random(20240611)
    tables = []
    for n_vars in (1, 2, 3):
        for _ in range(25):
            alphabet = ["A", "B", "C"]
            if rng.random() < 0.5:
                alphabet.append(DC_INPUT_STRING)
            tables.append([rng.choice(alphabet) for _ in range(2 ** n_vars)])
    return tables
