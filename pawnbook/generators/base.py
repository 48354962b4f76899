"""Base generator class for synthetic lending data."""

from __future__ import annotations

import random
from abc import ABC

from faker import Faker

from pawnbook.config import get_config


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: a Faker instance and a private random
    number generator, both seeded for reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility. Defaults to ``GeneratorConfig.seed``.
    locale : str | None
        Faker locale. Defaults to ``GeneratorConfig.locale`` (``en_PH``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str | None = None,
    ) -> None:
        config = get_config().generator
        if seed is None:
            seed = config.seed
        self.fake = Faker(locale or config.locale)
        self.rng = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)
