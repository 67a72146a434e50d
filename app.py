import logging

import numpy as np
import pandas as pd
import plotly.express as px
import streamlit as st

from tagtrie import BreadthTriePrinter, DepthTriePrinter, PrinterConfig, TaggedTrie
from tagtrie.workloads import WorkLoad

logging.basicConfig(level=logging.INFO, format="[%(name)s | %(levelname)s] %(message)s")
logger = logging.getLogger("tagtrie.app")

# Configure page
st.set_page_config(
    page_title="Tagged Trie Explorer",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🌳 Tagged Trie Explorer")
st.markdown("---")


@st.cache_data(show_spinner=False)
def load_strings(source, size, seed, p_freq):
    wl = WorkLoad(seed=seed)
    if source == "Words":
        return wl.words(size, p_freq=p_freq)
    if source == "URLs":
        return wl.urls(size)
    return wl.ips(size)


def node_table(trie):
    rows = [
        {
            "Level": info.level,
            "Value": info.value,
            "Descriptor": info.descriptor,
            "Tags": ", ".join(map(str, info.tags)),
            "Tag Count": len(info.tags),
        }
        for info in BreadthTriePrinter().row(trie)
    ]
    return pd.DataFrame(rows)


# Sidebar
with st.sidebar:
    st.header("Data Source")
    source = st.selectbox("Choose strings:", ["Words", "URLs", "IPs", "Text"])

    if source == "Text":
        uploaded_file = st.file_uploader("Upload a text file (one string per line)", type=["txt"])
        pasted = st.text_area("...or paste lines", "1\n12\n13\n14\n125\n126\n127\n138\n139\n130\n141\n142\n143")
        text = uploaded_file.getvalue().decode("utf-8") if uploaded_file is not None else pasted
        strings = text.splitlines()
    else:
        size = st.slider("Number of strings", min_value=10, max_value=5_000, value=200, step=10)
        seed = st.number_input("Seed", value=42, step=1)
        p_freq = st.slider("Prefix frequency", 0.0, 1.0, 0.5) if source == "Words" else 0.0
        try:
            strings = load_strings(source, size, int(seed), p_freq)
        except ValueError as e:
            st.error(f"❌ Could not generate workload: {e}")
            strings = []

    st.markdown("---")
    st.subheader("Rendering")
    indicator = st.text_input("Depth indicator", ".", max_chars=1) or "."
    show_tags = st.checkbox("Show tags", value=True)

trie = TaggedTrie.from_strings(strings)
logger.info("Built trie from %d strings", len(strings))
df = node_table(trie)

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Strings", len(strings))
with col2:
    st.metric("Nodes", trie.count_nodes())
with col3:
    st.metric("Avg Branching", f"{trie.count_nodes(get_avg_branch_factor=True):.2f}")
with col4:
    st.metric("Height", int(df["Level"].max()) if not df.empty else 0)

tab1, tab2, tab3 = st.tabs(["Structure", "Renderings", "Autocomplete"])

with tab1:
    st.subheader("Nodes per Level")
    counts = np.bincount(df["Level"].to_numpy()) if not df.empty else np.array([])
    fig = px.bar(x=np.arange(len(counts)), y=counts, title="Nodes per level")
    fig.update_layout(xaxis_title="Level", yaxis_title="Nodes")
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("Row-order Nodes")
    st.dataframe(df, use_container_width=True)

with tab2:
    try:
        config = PrinterConfig(depth_indicator=indicator, show_tags=show_tags)
    except ValueError as e:
        st.error(f"❌ {e}")
        config = PrinterConfig(show_tags=show_tags)
    col1, col2 = st.columns(2)
    with col1:
        st.write("**Depth-first:**")
        st.code(DepthTriePrinter(config).render(trie) or "(empty)")
    with col2:
        st.write("**Row order:**")
        st.code(BreadthTriePrinter(config).render(trie) or "(empty)")

with tab3:
    prefix = st.text_input("Prefix")
    k = st.number_input("Max results", min_value=1, value=20, step=1)
    matches = list(trie.enumerate_prefix(prefix, k=int(k)))
    if matches:
        st.dataframe(pd.DataFrame(
            [{"String": s, "Tags": ", ".join(map(str, tags))} for s, tags in matches]
        ))
    else:
        st.info("No stored string starts with that prefix")

st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Tagged Trie Explorer
    </div>
    """,
    unsafe_allow_html=True
)
