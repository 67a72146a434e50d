import random
from dataclasses import dataclass
from typing import Dict, Optional

from faker import Faker

## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public IPs
        private_weights: dict, weights for private IPs {a: x, b: x, c: x}
        seed: int, seed for random number generator
    """
    public_share: float = 0.9
    private_weights: Optional[Dict[str, float]] = None
    seed: Optional[int] = None

    def __post_init__(self):
        if self.public_share < 0 or self.public_share > 1:
            raise ValueError("public_share must be between 0 and 1")
        if self.private_weights is None:
            self.private_weights = {'a': 0.35, 'b': 0.10, 'c': 0.55}
            return
        missing = [k for k in ('a', 'b', 'c') if k not in self.private_weights]
        if missing:
            raise ValueError(f"private_weights missing keys: {missing}")
        if any(self.private_weights[k] < 0 for k in ('a', 'b', 'c')):
            raise ValueError("private_weights must be non-negative")
        if sum(self.private_weights[k] for k in ('a', 'b', 'c')) == 0:
            raise ValueError("Sum of private_weights must be > 0")
        self.private_weights = {cls: self.private_weights[cls] for cls in ('a', 'b', 'c')}


class IPGenerator:
    """Dotted IPv4 strings. Private ranges share long prefixes, public ones scatter."""

    def __init__(self, config: Optional[IPConfig] = None):
        self.config = config or IPConfig()
        self.rng = random.Random(self.config.seed)
        self.fake = Faker()
        self.fake.seed_instance(self.config.seed)
        self.priv_classes, self.weights = zip(*self.config.private_weights.items())

    def single(self) -> str:
        if self.rng.random() >= self.config.public_share:
            cls = self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]
            return self.fake.ipv4_private(address_class=cls)
        return self.fake.ipv4_public()

    def batch(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]
