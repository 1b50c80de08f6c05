"""
Hold'em Equity Simulator Web App
Streamlit interface for running range-vs-range equity simulations.
"""

import streamlit as st
import pandas as pd
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from holdem_sim.engine.range_parser import expand_range, split_range
from holdem_sim.engine.starting_hands import TOTAL_COMBINATIONS, range_label
from holdem_sim.errors import HoldemSimError
from holdem_sim.presets import PRESETS
from holdem_sim.simulator import Player, SimulationConfig, Simulator, TieCredit

# Page config
st.set_page_config(
    page_title="Hold'em Equity Simulator",
    page_icon="🃏",
    layout="wide"
)

st.title("🃏 Hold'em Equity Simulator")
st.markdown("*Monte Carlo equity for hand ranges*")

# Sidebar for settings
st.sidebar.header("Settings")

num_players = st.sidebar.slider("Players", min_value=2, max_value=10, value=2)
iterations = st.sidebar.slider("Iterations", min_value=1000, max_value=200000, value=20000, step=1000)
board_text = st.sidebar.text_input("Board (0, 3, 4 or 5 cards)", placeholder="Kh7d2c")
seed_text = st.sidebar.text_input("Seed (optional)")
tie_credit = st.sidebar.radio("Tie credit", [t.value for t in TieCredit],
                              help="split: 1/k per k-way tie; half: every tie counts half")
resolve_kickers = st.sidebar.checkbox("Break ties on kickers")

preset_options = ["custom"] + list(PRESETS.keys())
preset_display = {"custom": "Custom", **{k: PRESETS[k].name for k in PRESETS}}

st.divider()

# Player ranges
players = []
columns = st.columns(min(num_players, 5))
for i in range(num_players):
    with columns[i % len(columns)]:
        st.subheader(f"Player {i + 1}")
        preset_key = st.selectbox("Preset", options=preset_options,
                                  format_func=lambda x: preset_display[x], key=f"preset_{i}")
        default = "" if preset_key == "custom" else ", ".join(PRESETS[preset_key].hands())
        text = st.text_area("Range", value=default, key=f"range_{i}_{preset_key}",
                            placeholder="AA, KK, AKs, AKo")
        tokens = split_range(text)
        if tokens:
            try:
                combos = len(expand_range(tokens))
                pct = round(combos / TOTAL_COMBINATIONS * 100, 1)
                st.caption(f"{combos} combos · {pct}% · {range_label(pct)}")
            except HoldemSimError as e:
                st.caption(f"⚠️ {e}")
        players.append((f"p{i + 1}", f"Player {i + 1}", tokens))

# Run button
if st.button("🎲 Run Simulation", type="primary", use_container_width=True):
    config = SimulationConfig(
        iterations=iterations,
        seed=int(seed_text) if seed_text.strip().isdigit() else None,
        tie_credit=TieCredit(tie_credit),
        resolve_kickers=resolve_kickers,
        report_every=max(1, iterations // 100),
    )
    sim = Simulator(config)

    try:
        seated = [Player.from_range(pid, tokens, name=name) for pid, name, tokens in players]
        seated, board, iterations = sim.prepare(seated, board_text)
        runner = sim.iter_run(seated, board, iterations)
    except HoldemSimError as e:
        st.error(str(e))
        st.stop()

    progress_bar = st.progress(0)
    status_text = st.empty()

    counts = None
    try:
        for counts in runner:
            progress_bar.progress(counts.attempted / iterations)
            status_text.text(f"Deal {counts.attempted:,}/{iterations:,}... ({counts.conflicts:,} conflicts skipped)")
    except HoldemSimError as e:
        progress_bar.empty()
        status_text.empty()
        st.error(str(e))
        st.stop()

    progress_bar.empty()
    status_text.empty()

    result = sim.build_result(seated, counts, board)

    st.subheader(f"Results ({result.evaluated:,} evaluated deals)")
    if result.evaluated == 0:
        st.warning("Every deal conflicted; the ranges cannot be dealt together on this board.")

    metric_columns = st.columns(len(result.players))
    for col, p in zip(metric_columns, result.players):
        with col:
            st.metric(p.name, f"{p.equity:.1f}%")
            st.caption(f"Win {p.win_pct:.1f}% · Tie {p.tie_pct:.1f}%")

    # Equity chart
    chart_data = pd.DataFrame({
        'Player': [p.name for p in result.players],
        'Equity': [p.equity for p in result.players],
    })
    st.bar_chart(chart_data.set_index('Player'))

    st.dataframe(pd.DataFrame([p.to_dict() for p in result.players]), use_container_width=True)

# Footer
st.divider()
st.markdown("*Built with the holdem_sim engine*")
