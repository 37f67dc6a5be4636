"""
Radix (Patricia) trie mapping string keys to arbitrary payload values.

Labels live on nodes as text *segments*: concatenating the segments along the
root-to-node path yields the full key stored at that node. Chains of
single-child nodes are never materialized, so keys sharing long prefixes
(URL routes, symbol names, bit-string network prefixes) share storage.

Key features
------------
- **Prefix-sharing insertion**
  - `add` compares the incoming path against each child segment and applies
    exactly one of four overlap cases (overwrite / descend / shrink / split).
- **Exact-match lookup**
  - `find` returns the node whose path equals the query, or `None`.
    The node may itself hold no value (a *junction*); `get` answers the
    value-level question directly.
- **Character-correct slicing**
  - All lengths are counted in characters (code points), never in encoded
    bytes, so multi-byte keys are split only at character boundaries.
- **Iterative traversals**
  - Insert, lookup and node counting walk the tree with loops, not
    recursion, so long chains of branch points never hit recursion limits.

Classes
-------
Node
    One segment of the tree: `key`, optional `value`, ordered `children`.
RadixTrie
    Public API for building and querying the trie.

Public API (high level)
-----------------------
- `compare(incoming, existing)`
    `(shared, input_rest, existing_rest)` for two segments, or
    `(None, None, None)` when they share no leading character.
- `RadixTrie.add(path, value)`
    Insert or overwrite (last write wins).
- `RadixTrie.batch_add(items)`
    Insert an iterable of `(path, value)` pairs in order.
- `RadixTrie.find(path)`
    Node for exactly `path`, or `None`.
- `RadixTrie.get(path, default=None)`
    Stored value for exactly `path`, or `default`.
- `RadixTrie.count_nodes(get_avg_branch_factor=False)`
    Total node count, or average out-degree over internal nodes.

Conventions & invariants
------------------------
- **Sibling disjointness:** no two children of one node share a non-empty
  prefix. Every structural change in `add` restores it, which is what lets
  `add` and `find` stop at the first matching child.
- **Junctions:** a node without a value exists only to host two or more
  children that diverge after a shared prefix.
- **Sibling order:** children keep insertion order; a split replaces the
  old child at its own index.
- **Empty key:** `""` is stored on the root, whose segment is `""`.
- **Not thread-safe:** concurrent mutation must be serialized by the caller.
"""

import logging

log = logging.getLogger(__name__)

_EMPTY = object()


def _lcp(a, b):
  """Return the length, in characters, of the longest common prefix of a and b."""
  i = 0
  n = min(len(a), len(b))
  while i < n and a[i] == b[i]:
    i += 1
  return i


def compare(incoming, existing):
  """Split two segments around their shared leading run.

  Parameters
  ----------
  incoming : str
      Segment being inserted or searched for.
  existing : str
      Segment already stored on a node.

  Returns
  -------
  tuple[str | None, str | None, str | None]
      `(shared, input_rest, existing_rest)`. `shared` is `None` when the
      segments have no common first character, in which case both rests are
      `None` as well. A rest is `None` when that side is fully consumed.
  """
  i = _lcp(incoming, existing)
  if i == 0:
    return None, None, None
  assert incoming[:i] == existing[:i], "shared prefix differs between segments"

  shared = incoming[:i]
  input_rest = incoming[i:] or None
  existing_rest = existing[i:] or None
  return shared, input_rest, existing_rest


def _check_key(path):
  if not isinstance(path, str):
    raise TypeError(f"trie keys must be str, not {type(path).__name__}")


class Node:
  __slots__ = ("key", "children", "_value")

  def __init__(self, key="", value=_EMPTY, children=None):
    self.key = key
    self.children = [] if children is None else children
    self._value = value

  @property
  def has_value(self):
    """True if some inserted key terminates exactly at this node."""
    return self._value is not _EMPTY

  @property
  def value(self):
    """Stored payload, or None for a junction (or the bare root)."""
    return None if self._value is _EMPTY else self._value

  @value.setter
  def value(self, value):
    self._value = value

  def is_leaf(self):
    return not self.children

  def __repr__(self):
    keys = [c.key for c in self.children]
    if self.has_value:
      return f"Node(key={self.key!r}, value={self._value!r}, children={keys!r})"
    return f"Node(key={self.key!r}, children={keys!r})"


#### ===================================================  ####
#    Radix Trie: insert with prefix splitting, exact lookup
#### ===================================================  ####

class RadixTrie:
  __slots__ = ("root", "_size")

  def __init__(self):
    self.root = Node()
    self._size = 0

  def __len__(self):
    return self._size

  def __contains__(self, path):
    node = self.find(path)
    return node is not None and node.has_value

  def __repr__(self):
    return f"RadixTrie(keys={self._size}, root={self.root!r})"

  def _store(self, node, value):
    if not node.has_value:
      self._size += 1
    node.value = value


  def add(self, path, value):
    """Insert `value` under `path`, overwriting any value already stored there.

    - Walks down from the root; at each node, the first child whose segment
      shares a prefix with the remaining path decides the case:
      * both consumed: overwrite the child's value;
      * child segment consumed: descend into it with the remainder;
      * path consumed: shrink the child and hang it under a new node that
        carries the value;
      * neither consumed: shrink the child and put it next to a new leaf
        under a value-less junction.
    - If no child shares a prefix, the remainder becomes a new leaf.

    Args:
        path (str): Full key.
        value: Payload; any object, including None.

    Raises:
        TypeError: if `path` is not a str.
    """
    _check_key(path)
    node = self.root
    if not path:
      self._store(node, value)
      return

    while True:
      for idx, child in enumerate(node.children):
        shared, rest, tail = compare(path, child.key)
        if shared is None:
          continue

        if rest is None and tail is None:
          log.debug("overwrite value at segment %r", child.key)
          self._store(child, value)
          return

        if tail is None:
          node, path = child, rest
          break

        child.key = tail
        if rest is None:
          mid = Node(shared, value, [child])
          log.debug("shrink %r under new valued node %r", tail, shared)
        else:
          mid = Node(shared, children=[child, Node(rest, value)])
          log.debug("split %r into junction %r -> (%r, %r)", shared + tail, shared, tail, rest)
        node.children[idx] = mid
        self._size += 1
        return
      else:
        node.children.append(Node(path, value))
        self._size += 1
        log.debug("new leaf %r", path)
        return


  def batch_add(self, items):
    """Insert each `(path, value)` pair in iteration order."""
    for path, value in items:
      self.add(path, value)


  def find(self, path):
    """Return the node whose full path is exactly `path`, else None.

    The returned node is the live node inside the trie, not a copy; treat it
    as read-only. Its `value` may be None when `path` ends on a junction,
    so "a node exists here" and "a value was stored here" stay separate
    questions (see `has_value` and `get`).

    Raises:
        TypeError: if `path` is not a str.
    """
    _check_key(path)
    node = self.root
    rest = path
    while rest:
      for child in node.children:
        if rest.startswith(child.key):
          rest = rest[len(child.key):]
          node = child
          break
      else:
        return None
    return node


  def get(self, path, default=None):
    """Return the value stored for exactly `path`, or `default`."""
    node = self.find(path)
    if node is None or not node.has_value:
      return default
    return node.value


  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the total node count (root included).
        If True, return `sum(len(children)) / (# internal nodes)`.

    Returns
    -------
    int | float
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      deg = len(node.children)
      if deg:
        total_deg += deg
        internal += 1
        stack.extend(node.children)
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes


def new_trie():
  """Construct an empty trie."""
  return RadixTrie()
