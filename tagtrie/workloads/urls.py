import random
import string
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from faker import Faker

from .words import word_list


## === Config Class === ##

@dataclass
class URLConfig:
    """
    Configuration for generate_urls
        num_hosts: int, size of the host pool hosts are drawn from (Zipf weighted)
        slug_p: float, probability of a path segment being a random slug (vs. a word)
        zipf_s: float, exponent of the Zipf weights over the host pool
    """
    num_hosts: int = 50
    slug_p: float = 0.3
    zipf_s: float = 1.1

    def __post_init__(self):
        if self.num_hosts <= 0 or self.num_hosts > 10_000:
            raise ValueError("num_hosts must be between 1 and 10,000")
        if self.slug_p < 0 or self.slug_p > 1:
            raise ValueError("slug_p must be between 0 and 1")
        if self.zipf_s <= 0:
            raise ValueError("zipf_s must be positive")


### ================= URL Generation Probability Config ================= ###

file_exts = ["js", "css", "html", "jpg", "png", "gif", "svg", "woff2", "pdf", "json", "mp4"]
file_ext_weights = [0.30, 0.10, 0.04, 0.11, 0.10, 0.05, 0.02, 0.09, 0.04, 0.04, 0.04]

slug_separators = ["-", "_"]
slug_separator_weights = [0.87, 0.13]

depths = [0, 1, 2, 3, 4, 5]
depth_weights = [0.20, 0.30, 0.25, 0.13, 0.10, 0.02]


### ================= URL Generation Functions ================= ###

def load_hosts(fake, num_hosts, s=1.1):
  """Draw a pool of distinct host names, weighted by Zipf's law on their rank."""
  hosts = []
  seen = set()
  while len(hosts) < num_hosts:
    host = fake.domain_name(levels=1 if fake.random.random() < 0.7 else 2)
    if host not in seen:
      seen.add(host)
      hosts.append(host)
  weights = [1 / ((r + 1) ** s) for r in range(num_hosts)]
  return hosts, weights


def pick_scheme(rng):
  """Pick a scheme (http or https) with a realistic probability."""
  return rng.choices(["http", "https"], weights=[0.12, 0.88], k=1)[0]


def slug(rng, min_len=2, max_len=12, digit_p=0.15, sep_p=0.15):
  pool = string.ascii_lowercase + (string.digits if rng.random() < digit_p else "")
  s = "".join(rng.choices(pool, k=rng.randint(min_len, max_len)))
  if rng.random() < sep_p and len(s) > 3:
    indx = rng.randint(2, len(s) - 2)
    s = s[:indx] + rng.choices(slug_separators, slug_separator_weights, k=1)[0] + s[indx:]
  return quote(s, safe="-_.~")


def gen_path(rng, slug_p=0.3):
  """Generate a random path up to five segments deep."""
  depth = rng.choices(depths, weights=depth_weights, k=1)[0]
  if depth == 0:
    return "/"
  words = word_list()
  segs = []
  for _ in range(depth):
    segs.append(slug(rng) if rng.random() < slug_p else rng.choice(words))
    slug_p += (1 - slug_p) * 0.15
  path = "/" + "/".join(segs)
  if rng.random() < 0.3:
    return path + "." + rng.choices(file_exts, weights=file_ext_weights, k=1)[0]
  return path + "/"


def generate_urls(num_urls, seed=None, config: Optional[URLConfig] = None):
  """Generate a list of random URLs; same seed, same list."""
  if num_urls < 1:
    raise ValueError("num_urls must be positive")
  config = config or URLConfig()
  rng = random.Random(seed)
  fake = Faker()
  fake.seed_instance(seed)
  hosts, weights = load_hosts(fake, config.num_hosts, config.zipf_s)
  urls = []
  for _ in range(num_urls):
    host = rng.choices(hosts, weights=weights, k=1)[0]
    urls.append(f"{pick_scheme(rng)}://{host}{gen_path(rng, config.slug_p)}")
  return urls
