import math
import random
from collections import defaultdict
from functools import lru_cache

from faker import Faker


@lru_cache(maxsize=1)
def word_list():
  """Sorted, de-duplicated English word list shipped with Faker's lorem provider."""
  return sorted({w.lower() for w in Faker("en_US").get_words_list() if w.isalpha()})


@lru_cache(maxsize=1)
def _prefix_buckets():
  ## Words grouped by their first two letters, so that words sharing
  ## a prefix can be drawn in runs
  bucket = defaultdict(list)
  for word in word_list():
    bucket[word[:2]].append(word)
  prefixes = sorted(bucket)
  weights = [len(bucket[p]) for p in prefixes]
  return bucket, prefixes, weights


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random words from the word list.
  - unique=False: sample with replacement (fast, allows duplicates)
  - unique=True: sample without replacement (requires n <= len(word_list()))
  """
  words = word_list()
  if num_words < 1 or (unique is True and num_words > len(words)):
    raise ValueError(f"num_words must be between 1 and {len(words)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(words, num_words)
  return rng.choices(words, k=num_words)


def _p_eff_log(x, max_mean=100):
  # Logarithmic mapping of prefix frequency to the chance of staying in a run
  if x < 0 or x > 1:
    raise ValueError("prefix_freq must be between 0 and 1")
  x = max(0.0, min(0.999999, x))
  p = 1.0 - math.exp(-math.log(max_mean) * x)
  return min(p, 0.999999)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generate words in runs that share a two-letter prefix.

  A higher prefix_freq means longer runs, which gives the trie more forks
  and deeper shared nodes. The frequency is applied logarithmically.
  """
  p_stay = _p_eff_log(prefix_freq)
  bucket, prefixes, weights = _prefix_buckets()
  max_unique = int(len(word_list()) / 1.1)
  if num_words < 1 or (unique is True and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  rng = random.Random(seed)

  out = []
  seen = set()
  exhausted = set()
  while len(out) < num_words:
    prefix = rng.choices(prefixes, weights=weights)[0]
    if unique and prefix in exhausted:
      continue
    options = bucket[prefix]
    pick = rng.choice(options)
    if unique and pick in seen:
      remaining = [w for w in options if w not in seen]
      if not remaining:
        exhausted.add(prefix)
        continue
      pick = rng.choice(remaining)
    out.append(pick)
    seen.add(pick)

    while len(out) < num_words and rng.random() < p_stay:
      pick = rng.choice(options)
      if unique and pick in seen:
        remaining = [w for w in options if w not in seen]
        if not remaining:
          exhausted.add(prefix)
          break
        pick = rng.choice(remaining)
      out.append(pick)
      seen.add(pick)
  return out
