import streamlit as st

from api_client import analyze_with_fallback, explain_tip
from habits import HABITS
from scoring import score_selection, share_text

GOALS = ["", "energy", "focus", "fitness"]


# --------------------- Streamlit setup --------------------- #

st.set_page_config(
    page_title="Lifestyle Score",
    page_icon="🌿",
    layout="wide",
)

st.title("🌿 Check Your Lifestyle Score")
st.caption("Answer a few simple questions to see how healthy your daily habits are.")


# --------------------- Session State helpers --------------------- #

def init_state():
    if "result" not in st.session_state:
        st.session_state.result = None
        st.session_state.is_ai = False
    if "history" not in st.session_state:
        # scores calculated during this session, oldest first
        st.session_state.history = []
    if "explanations" not in st.session_state:
        # {tip: explanation}
        st.session_state.explanations = {}


init_state()


def reset_app():
    st.session_state.clear()
    init_state()


# --------------------- UI Sections --------------------- #

with st.sidebar:
    st.header("⚙️ Controls")
    if st.button("🔄 Reset", use_container_width=True):
        reset_app()
        st.rerun()

    if st.session_state.history:
        st.markdown("### Score history")
        st.line_chart(st.session_state.history, height=120)

col_left, col_right = st.columns([1.2, 1.5])


# ----------------------------------------------------
# Checklist
# ----------------------------------------------------
with col_left:
    st.subheader("1️⃣ Check the habits you follow")

    checked = {}
    for habit in HABITS:
        checked[habit.id] = st.checkbox(habit.label, key=f"habit_{habit.id}")

    goal = st.selectbox(
        "Main goal (optional)",
        options=GOALS,
        format_func=lambda g: g.title() if g else "No preference",
    )
    note = st.text_area(
        "Anything else about your routine? (optional)",
        placeholder="Example: night shifts three times a week.",
        height=90,
    )

    local = score_selection(checked)
    st.metric("Instant score", f"{local.score}%", help=local.message)

    if st.button("Calculate My Lifestyle Score", type="primary"):
        selected = [habit_id for habit_id, on in checked.items() if on]
        with st.spinner("Analyzing your habits..."):
            result, is_ai = analyze_with_fallback(selected, goal=goal or None, user_input=note)

        st.session_state.result = result
        st.session_state.is_ai = is_ai
        st.session_state.explanations = {}
        st.session_state.history.append(result.score)

        if not is_ai:
            st.warning("AI analysis unavailable – showing your local score.")


# ----------------------------------------------------
# Result + tips
# ----------------------------------------------------
with col_right:
    st.subheader("2️⃣ Your result")

    result = st.session_state.result
    if result is None:
        st.info("Your score awaits. Check your habits and calculate.")
    else:
        st.progress(result.score / 100)
        st.markdown(f"### {result.score}% – {result.message}")
        st.caption("AI-refined analysis" if st.session_state.is_ai else "Local score")
        st.code(share_text(result), language=None)

        st.markdown("#### 💡 Tips to improve")
        if not result.tips:
            st.write("Nothing to add – keep it up!")

        selected = [habit_id for habit_id, on in checked.items() if on]
        for i, tip in enumerate(result.tips):
            cols = st.columns([4, 1])
            with cols[0]:
                st.markdown(f"- {tip}")
            with cols[1]:
                if st.button("Explain", key=f"explain_btn_{i}"):
                    try:
                        st.session_state.explanations[tip] = explain_tip(
                            tip, selected, goal=goal or None
                        )
                    except RuntimeError as e:
                        st.error(f"Explain API failed: {e}")

            explanation = st.session_state.explanations.get(tip)
            if explanation:
                st.caption(f"**Why it matters:** {explanation}")
