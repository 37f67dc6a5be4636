import os
import random
import string
from urllib.parse import quote

from faker import Faker
from tranco import Tranco

from .en_word_generator import load_words

FILE_DIR = os.path.dirname(os.path.abspath(__file__))
domain_cache_path = os.path.join(FILE_DIR, "tranco_cache")


### ================= Route Generation Probability Config ================= ###

# --- File extensions for leaf routes --- #
file_exts = ["html", "json", "xml", "csv", "txt", "js", "css", "png", "jpg", "svg", "pdf"]
file_ext_weights = [0.20, 0.18, 0.05, 0.05, 0.04, 0.16, 0.10, 0.09, 0.07, 0.03, 0.03]

# --- Path segment config --- #
slug_separators = ["-", "_"]
slug_separator_weights = [0.87, 0.13]

# Route depth (number of "/" segments) and its weights
route_depths = [0, 1, 2, 3, 4, 5]
route_depth_weights = [0.05, 0.30, 0.30, 0.18, 0.12, 0.05]

# Top-level collections most APIs and sites share; drives prefix reuse
collections = ["users", "user", "posts", "api", "static", "assets", "docs", "blog", "search", "admin"]
collection_weights = [0.16, 0.08, 0.12, 0.20, 0.10, 0.08, 0.08, 0.08, 0.05, 0.05]

param_keys = ["q", "id", "page", "ref", "lang", "utm_source", "session"]
param_weights = [0.20, 0.20, 0.18, 0.12, 0.10, 0.10, 0.10]


### ================= Host Sources ================= ###

def load_domains(n=100_000, cache_path=domain_cache_path, s=1.1):
  """Load top n domains from the Tranco list, with Zipf weights by rank.

  Needs network access the first time (cached under `cache_path`).
  """
  if n <= 0 or n > 1_000_000:
    raise ValueError("n must be between 1 and 1,000,000")
  t = Tranco(cache=True, cache_dir=cache_path)
  domains = t.list().top(n)
  weights_zipf = [1 / ((r + 1) ** s) for r in range(len(domains))]
  return domains, weights_zipf


def fake_domains(n, seed=None, s=1.1):
  """Offline stand-in for `load_domains`: n Faker domain names, Zipf weighted."""
  if n <= 0:
    raise ValueError("n must be positive")
  fake = Faker()
  if seed is not None:
    fake.seed_instance(seed)
  domains = list(dict.fromkeys(fake.domain_name() for _ in range(n)))
  weights_zipf = [1 / ((r + 1) ** s) for r in range(len(domains))]
  return domains, weights_zipf


def sample_host(domains, weights, rng):
  """Choose one host from `domains` using `weights`."""
  if not domains:
    raise ValueError("domains must not be empty")
  return rng.choices(domains, weights=weights, k=1)[0]


## ----- Path Generation ----- ##

def slug(rng, min_len=2, max_len=12, digit_p=0.15, sep_p=0.15):
  pool = string.ascii_lowercase + (string.digits if rng.random() < digit_p else "")
  s = "".join(rng.choices(pool, k=rng.randint(min_len, max_len)))
  if rng.random() < sep_p and len(s) > 3:
    indx = rng.randint(2, len(s) - 2)
    separator = rng.choices(slug_separators, slug_separator_weights, k=1)[0]
    s = s[:indx] + separator + s[indx:]
  return s


def segment(rng, slug_p):
  """Generate a single path segment: a slug, an id, or a vocabulary word."""
  roll = rng.random()
  if roll < slug_p:
    return slug(rng)
  if roll < slug_p + 0.1:
    return str(rng.randint(1, 10**5))
  return quote(rng.choice(load_words()).lower(), safe="-_.~")


def gen_paths(rng, slug_p=0.3):
  """Generate a random route such as `/api/users/1042/profile.json`.

  slug_p: probability of a segment being a slug (vs. a vocabulary word).
  The first segment is drawn from a small set of shared collections so
  generated routes overlap the way real routing tables do.
  """
  if slug_p < 0 or slug_p > 1:
    raise ValueError("slug_p must be between 0 and 1")

  depth = rng.choices(route_depths, weights=route_depth_weights, k=1)[0]
  if depth == 0:
    return "/"

  segs = [rng.choices(collections, weights=collection_weights, k=1)[0]]
  for _ in range(depth - 1):
    segs.append(segment(rng, slug_p))
    slug_p += (1 - slug_p) * 0.15

  path = "/" + "/".join(segs)
  if rng.random() < 0.3:
    path += "." + rng.choices(file_exts, weights=file_ext_weights, k=1)[0]
  return path


def query_string(rng, max_params=3):
  """Generate a random query string (or none)."""
  num_params = rng.choices(range(max_params + 1), weights=[0.6] + [0.4 / max_params] * max_params, k=1)[0]
  if num_params == 0:
    return ""
  keys = sorted(set(rng.choices(param_keys, weights=param_weights, k=num_params)))
  pairs = []
  for key in keys:
    if key in ("id", "page"):
      val = str(rng.randint(1, 500))
    elif key == "q":
      val = "+".join(rng.choices(load_words(), k=rng.randint(1, 3)))
    else:
      val = slug(rng, min_len=4, max_len=16, sep_p=0.0)
    pairs.append(f"{key}={val}")
  return "?" + "&".join(pairs)


### ================= Final Key Generation ================= ###

def generate_routes(num_routes, seed=None, slug_p=0.3):
  """Generate route paths (no scheme/host), the routing-table workload."""
  if num_routes < 1:
    raise ValueError("num_routes must be at least 1")
  rng = random.Random(seed)
  return [gen_paths(rng, slug_p) for _ in range(num_routes)]


def generate_urls(num_urls, seed=None, domains=None, weights=None):
  """Generate full URLs.

  Hosts come from `domains`/`weights` when given (e.g. from `load_domains`),
  otherwise from `fake_domains` so no network access is needed.
  """
  if num_urls < 1:
    raise ValueError("num_urls must be at least 1")
  rng = random.Random(seed)
  if domains is None:
    domains, weights = fake_domains(max(10, num_urls // 20), seed)
  urls = []
  for _ in range(num_urls):
    scheme = rng.choices(["http", "https"], weights=[0.12, 0.88], k=1)[0]
    host = sample_host(domains, weights, rng)
    urls.append(f"{scheme}://{host}{gen_paths(rng)}{query_string(rng)}")
  return urls
