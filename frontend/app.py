# frontend/app.py
import streamlit as st

# Page configuration MUST be the first Streamlit command
st.set_page_config(
    page_title="IMS NSIT Attendance Agent",
    page_icon="🎓",
    layout="wide"
)

import asyncio
import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from attendance_agent.config import DEBUG, configure_logging
from attendance_agent.models.conversation import MessageSender
from attendance_agent.services.agent import AttendanceAgent
from attendance_agent.services.memory import MemoryService
from attendance_agent.services.session import ChatSession

configure_logging()

# Initialize services - ONLY ONCE at the module level
@st.cache_resource
def get_services():
    return {
        "memory_service": MemoryService(),
        "agent": AttendanceAgent()
    }

services = get_services()

# Session state initialization
if "chat_session" not in st.session_state:
    st.session_state.chat_session = ChatSession(
        agent=services["agent"],
        memory_service=services["memory_service"]
    )
if "confirm_clear" not in st.session_state:
    st.session_state.confirm_clear = False

chat_session = st.session_state.chat_session

# Streamlit roles for our two senders
ROLE_FOR_SENDER = {
    MessageSender.USER: "user",
    MessageSender.AGENT: "assistant",
}

# History sidebar
with st.sidebar:
    st.subheader("Chat History")

    if st.button("➕ New Chat", width="stretch", disabled=chat_session.busy):
        chat_session.new_conversation()
        st.rerun()

    if not chat_session.history:
        st.caption("No past conversations yet.")

    for conversation in chat_session.history:
        is_active = conversation.id == chat_session.state.active_conversation_id
        if st.button(
            conversation.title,
            key=f"chat_{conversation.id}",
            width="stretch",
            type="primary" if is_active else "secondary",
            disabled=chat_session.busy
        ):
            chat_session.select_conversation(conversation.id)
            st.rerun()

    if chat_session.history:
        st.divider()
        if not st.session_state.confirm_clear:
            if st.button("🗑️ Clear History", width="stretch", disabled=chat_session.busy):
                st.session_state.confirm_clear = True
                st.rerun()
        else:
            st.warning("Are you sure you want to clear all chat history? This action cannot be undone.")
            col_yes, col_no = st.columns(2)
            if col_yes.button("Clear", type="primary", width="stretch", disabled=chat_session.busy):
                chat_session.clear_history()
                st.session_state.confirm_clear = False
                st.rerun()
            if col_no.button("Cancel", width="stretch"):
                st.session_state.confirm_clear = False
                st.rerun()

    if DEBUG:
        with st.expander("Debug Info"):
            st.write(f"Active conversation: {chat_session.state.active_conversation_id}")
            st.write(f"Visible turns: {len(chat_session.state.turns)}")
            st.write(f"Stored conversations: {len(chat_session.history)}")

st.title("🎓 IMS NSIT Attendance Agent")

# Display chat messages
for turn in chat_session.state.turns:
    with st.chat_message(ROLE_FOR_SENDER[turn.sender]):
        st.markdown(turn.text)

# Input for new message
prompt = st.chat_input("Ask about attendance...", disabled=chat_session.busy)
if prompt:
    # Display user message
    with st.chat_message("user"):
        st.markdown(prompt)

    # Display assistant response
    with st.chat_message("assistant"):
        with st.spinner("Checking attendance records..."):
            asyncio.run(chat_session.submit(prompt))

    # Re-render from session state so the sidebar picks up new titles
    st.rerun()
