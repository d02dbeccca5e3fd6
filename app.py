"""SeedPass -- Streamlit web interface."""

import streamlit as st

from seedpass import (
    CHARACTER_SETS,
    DEFAULT_LENGTH,
    DEFAULT_SETTINGS,
    MAX_LENGTH,
    MIN_LENGTH,
    GenerationSettings,
    SeedPassError,
    analyze_strength,
    build_password,
    explain,
    review_password,
    validate_settings,
)

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_SPROUT = _LUCIDE.format(s=32, paths=(
    '<path d="M7 20h10"/><path d="M10 20c5.5-2.5.8-6.4 3-10"/>'
    '<path d="M9.5 9.4c1.1.8 1.8 2.2 2.3 3.7-2 .4-3.5.4-4.8-.3'
    '-1.2-.6-2.3-1.9-3-4.2 2.8-.5 4.4 0 5.5.8z"/>'
    '<path d="M14.1 6a7 7 0 0 0-1.1 4c1.9-.1 3.3-.6 4.3-1.4'
    ' 1-1 1.6-2.3 1.7-4.6-2.7.1-4 1-4.9 2z"/>'
))

ICON_GAUGE = _LUCIDE.format(s=20, paths=(
    '<path d="m12 14 4-4"/><path d="M3.34 19a10 10 0 1 1 17.32 0"/>'
))

# Bar colour per strength level.
LEVEL_COLORS = {
    "weak":        "#d32f2f",
    "fair":        "#f57c00",
    "good":        "#fbc02d",
    "strong":      "#388e3c",
    "very-strong": "#1b5e20",
}

# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="SeedPass",
    page_icon="\U0001f331",
    layout="centered",
)


def show_analysis(report) -> None:
    """Render strength label, bar, entropy and crack times."""
    if report.cleared:
        st.markdown("**Strength:** - &nbsp;·&nbsp; - bits of entropy")
        st.progress(0)
        return

    color = LEVEL_COLORS[report.strength_level]
    st.markdown(
        f"**Strength:** <span style='color:{color}'>{report.label}</span>"
        f" &nbsp;·&nbsp; {report.entropy_bits} bits of entropy",
        unsafe_allow_html=True,
    )
    st.progress(report.strength_percentage / 100)

    col1, col2 = st.columns(2)
    col1.metric("Online attack (10k/s)", report.online_crack_time)
    col2.metric("Offline attack (10B/s)", report.offline_crack_time)


# ── Header ────────────────────────────────────────────────────────────────

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_SPROUT} SeedPass</h1>',
    unsafe_allow_html=True,
)
st.caption(
    "Blend a memorable word or number with secure randomness, "
    "or test how long any password would survive a brute-force attack.  \n"
    "Everything runs locally - nothing is sent over the network."
)

tab_generate, tab_test = st.tabs(["Generate Password", "Test Password"])

if "generated" not in st.session_state:
    st.session_state.generated = build_password(DEFAULT_SETTINGS)

# ── Generate tab ───────────────────────────────────────────────────────────

with tab_generate:
    col1, col2 = st.columns(2)
    with col1:
        word = st.text_input("Memorable word", placeholder="e.g. sunflower")
        number = st.text_input("Memorable number", placeholder="e.g. 42")
        custom = st.text_input("Custom symbols", placeholder="e.g. ~§")
    with col2:
        length = st.slider("Length", MIN_LENGTH, MAX_LENGTH, DEFAULT_LENGTH)
        selected = [
            name for name in CHARACTER_SETS
            if st.checkbox(name.capitalize(), value=True, key=f"class_{name}")
        ]

    if st.button("Generate password", type="primary"):
        settings = GenerationSettings(
            word=word.strip(),
            number_seed=number.strip(),
            custom_symbols=custom.strip(),
            length=length,
            classes=frozenset(selected),
        )
        try:
            validate_settings(settings)
            st.session_state.generated = build_password(settings)
        except SeedPassError as exc:
            st.error(str(exc))

    pwd = st.session_state.generated
    report = analyze_strength(pwd)
    st.code(pwd, language=None)
    show_analysis(report)
    st.info(explain(report))

# ── Test tab ───────────────────────────────────────────────────────────────

with tab_test:
    st.markdown(
        f'<p style="display:flex;align-items:center;gap:6px">'
        f'{ICON_GAUGE} <strong>Test a password</strong></p>',
        unsafe_allow_html=True,
    )
    tested = st.text_input(
        "Password",
        type="default",
        placeholder="Enter a password…",
        autocomplete="off",
    )

    report = analyze_strength(tested)
    show_analysis(report)

    review = review_password(tested, report, word=word)
    for w in review["warnings"]:
        st.warning(w, icon="⚠️")
    for s in review["suggestions"]:
        st.markdown(f"- {s}")
