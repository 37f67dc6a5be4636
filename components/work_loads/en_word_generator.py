import random
import math
import importlib
from collections import defaultdict
from functools import lru_cache


## Word vocabularies come from Faker's lorem providers, one per locale.
## Non-latin locales (ja_JP, ru_RU, ...) give multi-byte keys.
@lru_cache(maxsize=None)
def load_words(locale="en_US"):
  """Return the de-duplicated lorem word list for `locale`."""
  try:
    provider = importlib.import_module(f"faker.providers.lorem.{locale}").Provider
  except ModuleNotFoundError:
    raise ValueError(f"no lorem word list for locale {locale!r}") from None
  return tuple(dict.fromkeys(w for w in provider.word_list if w))


## Dictionary of words keyed by their first two letters.
## This is to generate words with common prefixes
@lru_cache(maxsize=None)
def _prefix_buckets(locale="en_US"):
  bucket = defaultdict(list)
  for word in load_words(locale):
    bucket[word[:2]].append(word)
  prefixes = list(bucket.keys())
  weights = [len(bucket[p]) for p in prefixes]
  return bucket, prefixes, weights


def generate_random_words(num_words, seed=None, unique=False, locale="en_US"):
  """
  Return n random words from the locale's vocabulary.
  - unique=False: sample with replacement (fast, allows duplicates)
  - unique=True: sample without replacement (requires n <= vocabulary size)
  """
  word_list = load_words(locale)
  if num_words < 1 or (unique is True and num_words > len(word_list)):
    raise ValueError(f"num_words must be between 1 and {len(word_list)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(word_list, num_words)
  return rng.choices(word_list, k=num_words)


def _p_eff_log(x, max_mean=100):
  # Logarithmic mapping of prefix frequency to the chance of staying in a bucket
  if x < 0 or x > 1:
    raise ValueError("prefix_freq must be between 0 and 1")
  x = min(0.999999, x)
  k = math.log(max_mean)
  return min(1.0 - math.exp(-k * x), 0.999999)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False, locale="en_US"):
  """Generate words where runs of consecutive words share a two-letter prefix.

  A higher prefix_freq keeps drawing from the same prefix bucket for longer,
  which produces deeper shared paths once the words are put into a trie.
  prefix_freq: 0 -> 1, applied logarithmically.
  """
  p_stay = _p_eff_log(prefix_freq)
  bucket, prefixes, weights = _prefix_buckets(locale)
  max_unique = len(load_words(locale))
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
    while True:
      if unique:
        remaining = [w for w in options if w not in seen]
        if not remaining:
          exhausted.add(prefix)
          break
        word = rng.choice(remaining)
        seen.add(word)
      else:
        word = rng.choice(options)
      out.append(word)
      if len(out) >= num_words or rng.random() >= p_stay:
        break
  return out
