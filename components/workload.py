#!/usr/bin/env python3
from components.work_loads.url_generator import generate_urls, generate_routes, load_domains
from components.work_loads.en_word_generator import generate_random_words, gen_words_with_prefix_freq
from components.work_loads.ip_generator import IPConfig, IPGenerator


class WorkLoad:
    """Seeded key generators for filling a RadixTrie."""

    def __init__(self, seed=None):
        self.seed = seed

    def words(self, num_words, p_freq=0, unique=False, locale="en_US"):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique, locale)
        return generate_random_words(num_words, self.seed, unique, locale)

    def urls(self, num_urls, domains=None, weights=None):
        return generate_urls(num_urls, self.seed, domains, weights)

    def tranco_urls(self, num_urls, top=10_000):
        """URLs whose hosts are drawn from the Tranco top `top` domains."""
        domains, weights = load_domains(top)
        return generate_urls(num_urls, self.seed, domains, weights)

    def routes(self, num_routes):
        return generate_routes(num_routes, self.seed)

    def ips(self, num_ips, cidr=False):
        gen = IPGenerator(IPConfig(seed=self.seed))
        return gen.routes(num_ips) if cidr else gen.batch(num_ips)

    def ip_bits(self, num_routes):
        return IPGenerator(IPConfig(seed=self.seed)).bit_routes(num_routes)

    @staticmethod
    def keyed(keys):
        """Pair each key with its position, ready for `RadixTrie.batch_add`."""
        return [(key, i) for i, key in enumerate(keys)]
