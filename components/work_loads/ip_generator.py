import random
import ipaddress
from typing import Dict, Optional, Tuple
from dataclasses import dataclass
from faker import Faker

## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public IPs
        private_weights: dict, weights for private IPs {a: x, b: x, c: x}
        prefix_lengths: tuple, CIDR lengths drawn (uniformly) by `routes`
        seed: int, seed for random number generator
    """
    public_share: float = 0.9
    private_weights: Optional[Dict[str, float]] = None
    prefix_lengths: Tuple[int, ...] = (8, 16, 20, 24, 24, 24, 28, 32)
    seed: Optional[int] = None

    def __post_init__(self):
        if not 0 <= self.public_share <= 1:
            raise ValueError("public_share must be between 0 and 1")
        if self.private_weights is None:
            self.private_weights = {'a': 0.35, 'b': 0.10, 'c': 0.55}
        else:
            missing = [k for k in ('a', 'b', 'c') if k not in self.private_weights]
            if missing:
                raise ValueError(f"private_weights missing keys: {missing}")
            if any(self.private_weights[k] < 0 for k in ('a', 'b', 'c')):
                raise ValueError("private_weights must be non-negative")
            if sum(self.private_weights[k] for k in ('a', 'b', 'c')) == 0:
                raise ValueError("Sum of private_weights must be > 0")
        if not self.prefix_lengths or any(not 0 < p <= 32 for p in self.prefix_lengths):
            raise ValueError("prefix_lengths must be non-empty and within 1..32")


def to_bitstring(address, prefix_len=32):
    """Render an IPv4 address (or the network part of it) as a '0'/'1' key.

    Bit-string keys are what a PATRICIA routing table branches on:
    `to_bitstring("10.0.0.0", 8) == "00001010"`.
    """
    if not 0 <= prefix_len <= 32:
        raise ValueError("prefix_len must be between 0 and 32")
    bits = format(int(ipaddress.IPv4Address(address)), "032b")
    return bits[:prefix_len]


class IPGenerator:
    def __init__(self, config: Optional[IPConfig] = None):
        self.config = config or IPConfig()
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.priv_classes, self.weights = zip(*sorted(self.config.private_weights.items()))

    def _priv_class(self):
        return self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]

    def single(self):
        """One dotted IPv4 address, public or private per `public_share`."""
        if self.rng.random() > self.config.public_share:
            return self.fake.ipv4_private(address_class=self._priv_class())
        return self.fake.ipv4_public()

    def batch(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]

    def routes(self, n):
        """n CIDR network strings such as '10.12.0.0/16'."""
        if n <= 0:
            raise ValueError("n must be positive")
        out = []
        for _ in range(n):
            plen = self.rng.choice(self.config.prefix_lengths)
            net = ipaddress.IPv4Network(f"{self.single()}/{plen}", strict=False)
            out.append(str(net))
        return out

    def bit_routes(self, n):
        """Like `routes`, but as bit-string keys of the network prefix."""
        out = []
        for cidr in self.routes(n):
            net = ipaddress.IPv4Network(cidr)
            out.append(to_bitstring(net.network_address, net.prefixlen))
        return out
