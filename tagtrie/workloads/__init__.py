"""Seeded string corpora for loading tagged tries."""
from .ips import IPConfig, IPGenerator
from .urls import URLConfig, generate_urls
from .words import gen_words_with_prefix_freq, generate_random_words


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        return generate_random_words(num_words, self.seed, unique)

    def urls(self, num_urls, config=None):
        return generate_urls(num_urls, self.seed, config)

    def ips(self, num_ips, public_share=0.9):
        return IPGenerator(IPConfig(public_share=public_share, seed=self.seed)).batch(num_ips)

    @staticmethod
    def tagged(strings, start=1):
        """Pair each string with its position, counting from `start`."""
        return [(s, tag) for tag, s in enumerate(strings, start=start)]


__all__ = [
    "IPConfig",
    "IPGenerator",
    "URLConfig",
    "WorkLoad",
    "gen_words_with_prefix_freq",
    "generate_random_words",
    "generate_urls",
]
