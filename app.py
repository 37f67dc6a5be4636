import time
from dataclasses import dataclass

import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px

from radixmap.trie import RadixTrie
from components.workload import WorkLoad


@dataclass
class BenchConfig:
    """
    Configuration for a build benchmark
        sizes: tuple, number of keys per run
        seed: int, seed shared by every workload
        repeats: int, timed runs per size (median is reported)
    """
    sizes: tuple = (1_000, 5_000, 10_000, 25_000)
    seed: int = 42
    repeats: int = 3

    def __post_init__(self):
        if not self.sizes or any(n < 1 for n in self.sizes):
            raise ValueError("sizes must be non-empty and positive")
        if self.repeats < 1:
            raise ValueError("repeats must be at least 1")


WORKLOADS = ["Words", "Clustered words", "Routes", "URLs", "URLs (Tranco hosts)", "IPv4 addresses", "IPv4 bit routes"]


def make_keys(kind, n, seed):
    wl = WorkLoad(seed)
    if kind == "Words":
        return wl.words(n)
    if kind == "Clustered words":
        return wl.words(n, p_freq=0.8)
    if kind == "Routes":
        return wl.routes(n)
    if kind == "URLs":
        return wl.urls(n)
    if kind == "URLs (Tranco hosts)":
        return wl.tranco_urls(n)
    if kind == "IPv4 addresses":
        return wl.ips(n)
    if kind == "IPv4 bit routes":
        return wl.ip_bits(n)
    raise ValueError(f"unknown workload: {kind}")


def time_build(keys, repeats):
    """Return (trie, median insert seconds, median find seconds)."""
    items = WorkLoad.keyed(keys)
    insert_t, find_t = [], []
    trie = None
    for _ in range(repeats):
        trie = RadixTrie()
        t0 = time.perf_counter()
        trie.batch_add(items)
        insert_t.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        for key in keys:
            trie.find(key)
        find_t.append(time.perf_counter() - t0)
    return trie, float(np.median(insert_t)), float(np.median(find_t))


def run_benchmark(kind, config):
    rows = []
    for n in config.sizes:
        keys = make_keys(kind, n, config.seed)
        trie, ins, fnd = time_build(keys, config.repeats)
        rows.append({
            "size": n,
            "distinct_keys": len(trie),
            "insert_s": ins,
            "find_s": fnd,
            "nodes": trie.count_nodes(),
            "avg_branch": trie.count_nodes(get_avg_branch_factor=True),
            "key_chars": sum(len(k) for k in set(keys)),
        })
    df = pd.DataFrame(rows)
    df["insert_us_per_key"] = df["insert_s"] / df["size"] * 1e6
    df["find_us_per_key"] = df["find_s"] / df["size"] * 1e6
    return df


# Configure page
st.set_page_config(
    page_title="Radix Trie Workbench",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🌳 Radix Trie Workbench")
st.markdown("---")

with st.sidebar:
    st.header("Navigation")
    page = st.selectbox("Choose a section:", ["Overview", "Build Benchmark", "Lookup"])

    st.markdown("---")
    st.subheader("Workload")
    kind = st.selectbox("Key source", WORKLOADS)
    seed = st.number_input("Seed", min_value=0, value=42, step=1)


if page == "Overview":
    st.header("Compressed prefix tree for exact-match lookups")
    st.markdown("""
    Keys are stored as shared segments: inserting `newsomething` and then
    `newprefix` creates a value-less junction `new` with two children.

    **Sections:**
    - ⏱️ Build Benchmark: time `add` / `find` across workload sizes
    - 🔍 Lookup: build one trie and query it
    """)

    demo = RadixTrie()
    demo.batch_add([("newsomething", 1), ("newprefix", 2), ("/users", 3), ("/user/x", 4)])
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Keys", len(demo))
    with col2:
        st.metric("Nodes", demo.count_nodes())
    with col3:
        st.metric("Avg branching", f"{demo.count_nodes(get_avg_branch_factor=True):.2f}")
    st.code(repr(demo.find("new")))

elif page == "Build Benchmark":
    st.header("⏱️ Build Benchmark")

    sizes = st.multiselect("Sizes", [1_000, 5_000, 10_000, 25_000, 50_000, 100_000],
                           default=[1_000, 5_000, 10_000])
    repeats = st.slider("Repeats per size", 1, 10, 3)

    if st.button("Run"):
        try:
            config = BenchConfig(sizes=tuple(sorted(sizes)), seed=int(seed), repeats=repeats)
            with st.spinner(f"Benchmarking {kind}..."):
                df = run_benchmark(kind, config)
        except ValueError as e:
            st.error(f"❌ {e}")
        else:
            st.session_state["bench"] = df
            st.success(f"✅ Benchmarked {len(df)} sizes")

    if "bench" in st.session_state:
        df = st.session_state["bench"]
        st.dataframe(df, use_container_width=True)

        timing = df.melt(id_vars="size", value_vars=["insert_us_per_key", "find_us_per_key"],
                         var_name="operation", value_name="µs per key")
        fig = px.line(timing, x="size", y="µs per key", color="operation", markers=True,
                      title="Per-key cost by workload size")
        st.plotly_chart(fig, use_container_width=True)

        fig_nodes = px.bar(df, x="size", y=["distinct_keys", "nodes"], barmode="group",
                           title="Distinct keys vs. trie nodes")
        st.plotly_chart(fig_nodes, use_container_width=True)
    else:
        st.info("👆 Pick sizes and press Run")

elif page == "Lookup":
    st.header("🔍 Lookup")
    n = st.number_input("Keys to insert", min_value=1, max_value=200_000, value=2_000, step=500)

    built_for = (kind, int(n), int(seed))
    if st.session_state.get("lookup_for") != built_for:
        try:
            keys = make_keys(kind, int(n), int(seed))
        except ValueError as e:
            st.error(f"❌ {e}")
            st.stop()
        trie = RadixTrie()
        trie.batch_add(WorkLoad.keyed(keys))
        st.session_state["lookup_for"] = built_for
        st.session_state["lookup"] = (keys, trie)
    keys, trie = st.session_state["lookup"]
    st.write(f"**{len(trie)}** distinct keys in **{trie.count_nodes()}** nodes")
    st.write("Sample keys:", keys[:10])

    query = st.text_input("Key to find", value=keys[0])
    node = trie.find(query)
    if node is None:
        st.warning("No node for this exact key")
    elif not node.has_value:
        st.info(f"Junction node with {len(node.children)} children, no value stored")
    else:
        st.success(f"Found value: {node.value!r}")

st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Radix Trie Workbench
    </div>
    """,
    unsafe_allow_html=True
)
