"""
Pulse One Streamlit UI

Minimal interface for submitting extracted documents and searching chunks.
"""

import os

import requests
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:8000")

st.set_page_config(page_title="Pulse One", page_icon="📚")

st.title("📚 Pulse One")
st.markdown("**HR document library with lexical search**")

# Health check
try:
    response = requests.get(f"{API_URL}/health", timeout=2)
    if response.ok:
        data = response.json()
        st.success(f"✓ API Connected ({data.get('status', 'unknown')})")
    else:
        st.error("❌ API unreachable")
except requests.RequestException as e:
    st.error(f"❌ API Connection Error: {e}")

st.markdown("---")
st.subheader("Add a document")

with st.form("add_document"):
    filename = st.text_input("Filename", value="document.txt")
    text = st.text_area("Extracted text", height=200)
    is_legacy = st.checkbox("Legacy data")
    submitted = st.form_submit_button("Process")

if submitted and text.strip():
    res = requests.post(
        f"{API_URL}/api/v1/documents",
        json={"filename": filename, "text": text, "is_legacy": is_legacy},
        timeout=60,
    )
    if res.ok:
        st.success(res.json()["message"])
    else:
        st.error(f"Processing failed ({res.status_code}): {res.text}")

st.markdown("---")
st.subheader("Search")

query = st.text_input("Query", placeholder="vacation policy")
if query:
    res = requests.post(f"{API_URL}/api/v1/search", json={"query": query}, timeout=10)
    if res.ok:
        hits = res.json()["hits"]
        if not hits:
            st.info("No matching chunks.")
        for hit in hits:
            with st.expander(f"{hit['filename']} #{hit['chunk_index']} (score {hit['relevance_score']})"):
                st.write(hit["content"])
    else:
        st.error(f"Search failed ({res.status_code}): {res.text}")
