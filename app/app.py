from pathlib import Path
import sys
import html
import logging
import os

import streamlit as st
import streamlit.components.v1 as components
from streamlit_flow import streamlit_flow
from streamlit_flow.elements import StreamlitFlowEdge, StreamlitFlowNode
from streamlit_flow.state import StreamlitFlowState

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from src.drsem.apa_table import (  # noqa: E402
    DEFAULT_TABLE_NOTE,
    DEFAULT_TABLE_NUMBER,
    DEFAULT_TABLE_TEXT,
    DEFAULT_TABLE_TITLE,
    build_apa_table,
    pdf_filename,
    table_to_markdown,
    table_to_pdf,
    toggle_column,
)
from src.drsem.attachments import UPLOAD_TYPES, AttachmentError, read_attachment  # noqa: E402
from src.drsem.chat_export import transcript_to_markdown, transcript_to_pdf  # noqa: E402
from src.drsem.chat_session import ChatSession  # noqa: E402
from src.drsem.checklist import SEM_SECTIONS, SemChecklist  # noqa: E402
from src.drsem.diagram_editor import DiagramEditor  # noqa: E402
from src.drsem.fit_indices import DEFAULT_FIT_INPUTS, FIT_TOOLTIPS, analyze_fit, overall_pass  # noqa: E402
from src.drsem.jamovi_syntax import EXAMPLE_SYNTAX, SNIPPETS, append_snippet, wrap_jmv_sem  # noqa: E402
from src.drsem.llm_client import DEFAULT_MODEL, GeminiJSONClient  # noqa: E402
from src.drsem.local_store import LocalStore  # noqa: E402
from src.drsem.model_file import ModelFileError, get_export_filename  # noqa: E402
from src.drsem.sample_size import estimate_sample_size, parse_population  # noqa: E402
from src.drsem.sem_graph import LINK_KINDS, NODE_KINDS  # noqa: E402
from src.drsem.theme import THEMES, cycle_theme, diagram_color_mode, normalize_theme, theme_css  # noqa: E402
from src.drsem.translations import LANGUAGES, SIDEBAR_ITEMS, get_strings  # noqa: E402
from src.drsem.ui_mapper import (  # noqa: E402
    flow_positions,
    parse_link_id,
    to_flow_edge_specs,
    to_flow_node_specs,
)
from src.drsem.validity import (  # noqa: E402
    DEFAULT_LOADINGS,
    RESET_LOADINGS,
    add_loading,
    compute_validity,
    remove_loading,
    update_loading,
)

logger = logging.getLogger("drsem.app")

TOOLS = ["conceptual", "fit_checker", "apa_table", "jamovi", "sample_size", "validity", "checklist"]
TOOL_LABELS = {
    "conceptual": "Research Canvas",
    "fit_checker": "Fit Checker",
    "apa_table": "APA Table",
    "jamovi": "Jamovi Syntax",
    "sample_size": "Sample Size",
    "validity": "Validity (AVE/CR)",
    "checklist": "SEM Checklist",
}


@st.cache_resource
def get_store() -> LocalStore:
    data_dir = os.getenv("DRSEM_DATA_DIR", "").strip()
    return LocalStore(Path(data_dir) if data_dir else ROOT_DIR / ".drsem_data")


def get_runtime_llm_client() -> GeminiJSONClient:
    key_source = str(st.session_state.get("llm_key_source", "Environment"))
    env_key = str(os.getenv("GEMINI_API_KEY", "") or os.getenv("API_KEY", "")).strip()
    app_key = str(st.session_state.get("llm_api_key", "")).strip()
    api_key = app_key if key_source == "Input in App" else env_key
    model = str(st.session_state.get("llm_model", "")).strip() or str(
        os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    ).strip()
    return GeminiJSONClient(api_key=api_key, model=model or DEFAULT_MODEL)


def ensure_state() -> None:
    store = get_store()
    if "editor" not in st.session_state:
        st.session_state.editor = DiagramEditor.from_store(store)
    if "chat" not in st.session_state:
        st.session_state.chat = ChatSession(client=get_runtime_llm_client(), store=store)
    if "checklist" not in st.session_state:
        st.session_state.checklist = SemChecklist(store=store)
    if "theme" not in st.session_state:
        st.session_state.theme = normalize_theme(store.load("theme", "light"))
    if "language" not in st.session_state:
        st.session_state.language = "th"
    if "active_tool" not in st.session_state:
        st.session_state.active_tool = "conceptual"
    if "llm_key_source" not in st.session_state:
        st.session_state.llm_key_source = "Environment"
    if "llm_api_key" not in st.session_state:
        st.session_state.llm_api_key = ""
    if "llm_model" not in st.session_state:
        st.session_state.llm_model = str(os.getenv("GEMINI_MODEL", DEFAULT_MODEL))
    if "pending_confirm" not in st.session_state:
        st.session_state.pending_confirm = None
    if "confirmed_action" not in st.session_state:
        st.session_state.confirmed_action = None
    if "last_flow_event" not in st.session_state:
        st.session_state.last_flow_event = None
    if "flow_state" not in st.session_state:
        st.session_state.flow_state = None
    if "flow_key" not in st.session_state:
        st.session_state.flow_key = None
    if "loadings" not in st.session_state:
        st.session_state.loadings = list(DEFAULT_LOADINGS)
    if "hidden_columns" not in st.session_state:
        st.session_state.hidden_columns = []
    if "jamovi_syntax" not in st.session_state:
        st.session_state.jamovi_syntax = EXAMPLE_SYNTAX
    if "flash" not in st.session_state:
        st.session_state.flash = None


def confirm_gate(action_id: str):
    """Confirmation callable for destructive operations.

    The first call records a pending request and declines; once the user
    accepts, the action is replayed and the gate answers yes exactly once.
    """

    def _confirm(message: str) -> bool:
        if st.session_state.confirmed_action == action_id:
            st.session_state.confirmed_action = None
            return True
        st.session_state.pending_confirm = {"action": action_id, "message": message}
        return False

    return _confirm


def replay_requested(action_id: str) -> bool:
    return st.session_state.confirmed_action == action_id


def run_gated(action_id: str, operation) -> None:
    done = operation(confirm_gate(action_id))
    if st.session_state.confirmed_action == action_id:
        st.session_state.confirmed_action = None
    if done or st.session_state.pending_confirm:
        st.rerun()


def render_pending_confirm() -> None:
    pending = st.session_state.pending_confirm
    if not pending:
        return
    st.warning(pending["message"])
    col_yes, col_no = st.columns(2)
    if col_yes.button("Confirm", key=f"confirm_{pending['action']}", use_container_width=True):
        st.session_state.confirmed_action = pending["action"]
        st.session_state.pending_confirm = None
        st.rerun()
    if col_no.button("Cancel", key=f"cancel_{pending['action']}", use_container_width=True):
        st.session_state.pending_confirm = None
        st.rerun()


def flash(message: str, level: str = "info") -> None:
    st.session_state.flash = {"message": message, "level": level}


def render_flash() -> None:
    notice = st.session_state.flash
    if not notice:
        return
    getattr(st, notice["level"], st.info)(notice["message"])
    st.session_state.flash = None


def to_flow_state(nodes_data: list, links_data: list, theme: str, highlight_id=None) -> StreamlitFlowState:
    flow_nodes = [StreamlitFlowNode(**spec) for spec in to_flow_node_specs(nodes_data, theme, highlight_id)]
    flow_edges = [StreamlitFlowEdge(**spec) for spec in to_flow_edge_specs(links_data, theme)]
    return StreamlitFlowState(nodes=flow_nodes, edges=flow_edges)


def render_mermaid_preview(mermaid_code: str, theme: str, height: int = 480) -> None:
    escaped = html.escape(mermaid_code or "")
    mermaid_theme = "dark" if diagram_color_mode(theme) == "dark" else "default"
    mermaid_html = f"""
<div style="padding: 8px;">
  <pre class="mermaid">{escaped}</pre>
  <div id="render_error" style="color:#b91c1c;font-family:monospace;"></div>
</div>
<script>
  function formatMermaidError(err) {{
    if (!err) return "unknown error";
    if (typeof err === "string") return err;
    if (err.message) return err.message;
    return String(err);
  }}

  function renderMermaid() {{
    try {{
      mermaid.initialize({{ startOnLoad: false, theme: "{mermaid_theme}", securityLevel: "loose" }});
      const nodes = document.querySelectorAll(".mermaid");
      mermaid.run({{ nodes }}).catch((err) => {{
        document.getElementById("render_error").textContent =
          "Mermaid render error: " + formatMermaidError(err);
      }});
    }} catch (err) {{
      document.getElementById("render_error").textContent =
        "Mermaid init error: " + formatMermaidError(err);
    }}
  }}

  if (window.mermaid) {{
    renderMermaid();
  }} else {{
    const script = document.createElement("script");
    script.src = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js";
    script.onload = renderMermaid;
    script.onerror = function() {{
      document.getElementById("render_error").textContent = "Failed to load Mermaid runtime.";
    }};
    document.head.appendChild(script);
  }}
</script>
"""
    components.html(mermaid_html, height=height, scrolling=True)


def switch_tool(tool: str) -> None:
    st.session_state.active_tool = tool


def render_sidebar(chat: ChatSession) -> None:
    with st.sidebar:
        st.markdown("### LLM Settings")
        st.session_state.llm_key_source = st.radio(
            "API Key Source",
            ["Environment", "Input in App"],
            index=0 if st.session_state.llm_key_source == "Environment" else 1,
            horizontal=True,
            key="llm_key_source_radio",
        )
        st.session_state.llm_model = st.text_input(
            "Model",
            value=st.session_state.llm_model or DEFAULT_MODEL,
            key="llm_model_input",
        ).strip() or DEFAULT_MODEL
        if st.session_state.llm_key_source == "Input in App":
            st.session_state.llm_api_key = st.text_input(
                "Gemini API Key",
                value=st.session_state.llm_api_key,
                type="password",
                key="llm_api_key_input",
                help="Stored only in current Streamlit session.",
            ).strip()
            st.caption(
                "Key status: configured" if st.session_state.llm_api_key else "Key status: not set"
            )
        else:
            has_env_key = bool(str(os.getenv("GEMINI_API_KEY", "") or os.getenv("API_KEY", "")).strip())
            st.caption(f"Env key status: {'configured' if has_env_key else 'not set'}")

        st.markdown("### Display")
        language = st.radio(
            "Language",
            list(LANGUAGES),
            index=list(LANGUAGES).index(st.session_state.language),
            format_func=lambda code: code.upper(),
            horizontal=True,
        )
        if language != st.session_state.language:
            st.session_state.language = language
            chat.set_language(language)
        if st.button(f"Theme: {st.session_state.theme}", use_container_width=True):
            st.session_state.theme = cycle_theme(st.session_state.theme)
            get_store().save("theme", st.session_state.theme)
            st.rerun()
        st.caption(" / ".join(THEMES))

        st.markdown("### Topics")
        for section in SIDEBAR_ITEMS:
            with st.expander(str(section["title"]), expanded=False):
                for item in section["items"]:
                    if st.button(item, key=f"topic_{item}", use_container_width=True, disabled=chat.busy):
                        chat.ask_topic(item)
                        st.rerun()


def render_api_key_screen(chat: ChatSession) -> None:
    st.error("API Key Required")
    st.markdown(
        "Dr.SEM needs a Gemini API key to answer questions. "
        "Set `GEMINI_API_KEY` in the environment, or choose **Input in App** in the sidebar "
        "and paste a key, then press **Retry**."
    )
    if st.button("Retry", type="primary"):
        chat.check_api_key()
        st.rerun()


def render_chat(chat: ChatSession) -> None:
    strings = get_strings(st.session_state.language)
    st.subheader("Dr.SEM")

    for index, message in enumerate(chat.messages):
        role = "user" if message.get("sender") == "user" else "assistant"
        with st.chat_message(role):
            st.markdown(message.get("text", ""))
            for attachment in message.get("attachments") or []:
                st.caption(f"📎 {attachment.get('content', '')}")
            for heading_key, list_key in (
                ("importantQuestions", "suggested_questions"),
                ("relatedQuestions", "related_questions"),
            ):
                questions = message.get(list_key) or []
                if questions:
                    st.markdown(f"**{strings[heading_key]}**")
                    for q_index, question in enumerate(questions):
                        if st.button(
                            question,
                            key=f"q_{index}_{list_key}_{q_index}",
                            disabled=chat.busy,
                        ):
                            chat.send(question)
                            st.rerun()

    if chat.suggested_tool:
        col_text, col_switch = st.columns([3, 1])
        col_text.info(f"{strings['suggestion']} {TOOL_LABELS[chat.suggested_tool]}")
        col_switch.button(
            strings["switch"],
            on_click=switch_tool,
            args=(chat.suggested_tool,),
            use_container_width=True,
        )

    uploaded = st.file_uploader(strings["upload"], type=UPLOAD_TYPES, key="chat_attachment")
    prompt = st.chat_input(strings["placeholder"], disabled=chat.busy)
    if prompt:
        attachment = None
        if uploaded is not None:
            try:
                attachment = read_attachment(uploaded.name, uploaded.getvalue(), uploaded.type)
            except AttachmentError as exc:
                st.error(str(exc))
                return
        with st.spinner("Dr.SEM is thinking..."):
            chat.send(prompt, attachment)
        st.rerun()

    col_clear, col_md, col_pdf = st.columns(3)
    if col_clear.button("Clear chat", use_container_width=True) or replay_requested("clear_chat"):
        run_gated("clear_chat", chat.clear)
    col_md.download_button(
        "Export .md",
        data=transcript_to_markdown(chat.messages),
        file_name="drsem_chat.md",
        mime="text/markdown",
        use_container_width=True,
    )
    col_pdf.download_button(
        "Export .pdf",
        data=transcript_to_pdf(chat.messages),
        file_name="drsem_chat.pdf",
        mime="application/pdf",
        use_container_width=True,
    )


def handle_flow_event(editor: DiagramEditor, curr_state: StreamlitFlowState) -> bool:
    selected_id = getattr(curr_state, "selected_id", None)
    event = (selected_id, getattr(curr_state, "timestamp", None))
    if event == st.session_state.last_flow_event:
        return False
    st.session_state.last_flow_event = event
    if not selected_id:
        if editor.selected_node_id is None and editor.selected_link_index is None:
            return False
        editor.click_canvas()
        return True
    link_index = parse_link_id(selected_id)
    if link_index is not None:
        editor.select_link(link_index)
    else:
        editor.click_node(str(selected_id))
    return True


def current_flow_state(editor: DiagramEditor, theme: str) -> StreamlitFlowState:
    """Flow state sent to the canvas, rebuilt only when the editor changed."""
    flow_key = (editor.revision, theme, editor.pending_source)
    if st.session_state.flow_key != flow_key or st.session_state.flow_state is None:
        st.session_state.flow_state = to_flow_state(editor.nodes, editor.links, theme, editor.pending_source)
        st.session_state.flow_key = flow_key
    return st.session_state.flow_state


def render_canvas(editor: DiagramEditor) -> None:
    theme = st.session_state.theme

    col_mode, col_kind = st.columns(2)
    mode = col_mode.radio("Mode", ["move", "link"], index=0 if editor.mode == "move" else 1, horizontal=True)
    if mode != editor.mode:
        editor.set_mode(mode)
    kind = col_kind.radio(
        "Link type",
        list(LINK_KINDS),
        index=list(LINK_KINDS).index(editor.link_kind),
        horizontal=True,
    )
    if kind != editor.link_kind:
        editor.set_link_kind(kind)

    with st.form("add_node_form", clear_on_submit=True):
        col_label, col_type, col_add = st.columns([3, 2, 1])
        label = col_label.text_input("Variable name")
        node_kind = col_type.selectbox("Variable type", list(NODE_KINDS))
        if col_add.form_submit_button("Add"):
            if editor.add_node(label, node_kind) is None:
                flash("Enter a variable name first.", "warning")
            st.rerun()

    cols = st.columns(6)
    if cols[0].button("Undo", disabled=not editor.can_undo(), use_container_width=True):
        editor.undo()
        st.rerun()
    if cols[1].button("Redo", disabled=not editor.can_redo(), use_container_width=True):
        editor.redo()
        st.rerun()
    if cols[2].button("Auto layout", use_container_width=True):
        editor.apply_auto_layout()
        st.rerun()
    has_selection = editor.selected_node_id is not None or editor.selected_link_index is not None
    if cols[3].button("Delete", disabled=not has_selection, use_container_width=True) or replay_requested(
        "delete_selected"
    ):
        run_gated("delete_selected", editor.delete_selected)
    if cols[4].button("New model", use_container_width=True) or replay_requested("new_model"):
        run_gated("new_model", editor.new_model)
    cols[5].download_button(
        "Export",
        data=editor.export_model(),
        file_name=get_export_filename(),
        mime="application/json",
        use_container_width=True,
    )

    if editor.mode == "link":
        if editor.pending_source:
            source = editor.graph.get_node(editor.pending_source)
            st.caption(f"Linking from {source['label'] if source else '?'}: click the target variable.")
        else:
            st.caption("Click the source variable, then the target variable.")

    sent_state = current_flow_state(editor, theme)
    curr_state = streamlit_flow(
        "sem_canvas",
        sent_state,
        fit_view=True,
        height=520,
        get_node_on_click=True,
        get_edge_on_click=True,
    )
    # the component echoes its last browser value until the browser reports again
    if curr_state.timestamp > sent_state.timestamp:
        positions = flow_positions(curr_state.nodes)
        changed = editor.sync_positions(positions, revision=st.session_state.flow_key[0])
        if not changed:
            st.session_state.flow_state = curr_state
        if handle_flow_event(editor, curr_state) or changed:
            st.rerun()

    with st.expander("Link variables", expanded=False):
        labels = {node["id"]: node["label"] for node in editor.nodes}
        if len(labels) >= 2:
            col_src, col_tgt, col_btn = st.columns([2, 2, 1])
            source_id = col_src.selectbox("From", list(labels), format_func=labels.get, key="link_from")
            target_id = col_tgt.selectbox("To", list(labels), format_func=labels.get, key="link_to")
            if col_btn.button("Link"):
                if not editor.connect(source_id, target_id):
                    flash("Link rejected: self-link or duplicate.", "warning")
                st.rerun()

    with st.expander("Import model", expanded=False):
        uploaded = st.file_uploader("Model file (.json)", type=["json"], key="model_import")
        if uploaded is not None and (st.button("Load model") or replay_requested("import_model")):
            try:
                run_gated("import_model", lambda confirm: editor.import_model(uploaded.getvalue(), confirm))
            except ModelFileError as exc:
                st.session_state.confirmed_action = None
                st.error(str(exc))

    st.markdown("### Model Preview")
    code = editor.to_mermaid(diagram_color_mode(theme))
    render_mermaid_preview(code, theme)
    with st.expander("Mermaid source", expanded=False):
        st.code(code, language="mermaid")


def render_fit_checker() -> None:
    st.subheader("Fit Indices Checker")
    st.caption("Check your model fit indices against Kline (2023) & Hair et al. (2022) criteria.")
    cols = st.columns(3)
    fields = [
        ("CFI", "cfi", 0.01),
        ("TLI", "tli", 0.01),
        ("RMSEA", "rmsea", 0.001),
        ("SRMR", "srmr", 0.001),
        ("Chi-Square", "chisq", 0.1),
        ("df", "df", 1.0),
    ]
    values = {}
    for index, (label, key, step) in enumerate(fields):
        values[key] = cols[index % 3].number_input(
            label,
            value=float(DEFAULT_FIT_INPUTS[key]),
            step=step,
            help=FIT_TOOLTIPS[label],
            key=f"fit_{key}",
        )
    try:
        results = analyze_fit(**values)
    except ValueError as exc:
        st.error(str(exc))
        return
    for result in results:
        marker = "✅" if result["pass"] else "❌"
        st.markdown(f"{marker} **{result['name']}** = {result['value']:.3f} ({result['message']})")
    if overall_pass(results):
        st.success("All indices meet the recommended criteria.")
    else:
        st.warning("Some indices fall outside the recommended criteria.")


def render_apa_table() -> None:
    st.subheader("APA Table Generator")
    text = st.text_area("Data (comma separated, first row is the header)", value=DEFAULT_TABLE_TEXT, height=160)
    col_num, col_title = st.columns([1, 3])
    number = col_num.text_input("Table number", value=DEFAULT_TABLE_NUMBER)
    title = col_title.text_input("Title", value=DEFAULT_TABLE_TITLE)
    note = st.text_input("Note", value=DEFAULT_TABLE_NOTE)

    table = build_apa_table(text, number, title, note, st.session_state.hidden_columns)
    if table.header:
        st.caption("Columns")
        toggles = st.columns(len(table.header))
        for index, column in enumerate(table.header):
            shown = column not in st.session_state.hidden_columns
            if toggles[index].checkbox(column, value=shown, key=f"apa_col_{index}_{column}") != shown:
                st.session_state.hidden_columns = toggle_column(st.session_state.hidden_columns, column)
                st.rerun()

    markdown = table_to_markdown(table)
    st.markdown(markdown)
    col_md, col_pdf = st.columns(2)
    col_md.download_button("Download .md", data=markdown, file_name="apa_table.md", mime="text/markdown")
    col_pdf.download_button(
        "Download .pdf",
        data=table_to_pdf(table),
        file_name=pdf_filename(number),
        mime="application/pdf",
    )


def render_jamovi(editor: DiagramEditor) -> None:
    st.subheader("Jamovi Syntax Helper")
    cols = st.columns(3)
    if cols[0].button("From canvas", use_container_width=True):
        st.session_state.jamovi_syntax = editor.to_lavaan() or EXAMPLE_SYNTAX
    if cols[1].button("Add CFA block", use_container_width=True):
        st.session_state.jamovi_syntax = append_snippet(st.session_state.jamovi_syntax, "cfa_block")
    if cols[2].button("Add regression path", use_container_width=True):
        st.session_state.jamovi_syntax = append_snippet(st.session_state.jamovi_syntax, "path")
    syntax = st.text_area("Model syntax (lavaan)", value=st.session_state.jamovi_syntax, height=260)
    st.session_state.jamovi_syntax = syntax
    st.caption(f"Snippets: {', '.join(sorted(SNIPPETS))}")
    wrapped = wrap_jmv_sem(syntax)
    st.code(wrapped, language="r")
    st.download_button("Download .R", data=wrapped, file_name="drsem_model.R", mime="text/plain")


def render_sample_size() -> None:
    st.subheader("Sample Size Calculator")
    cols = st.columns(2)
    observed = cols[0].number_input("Observed variables", min_value=0, value=15, step=1)
    latent = cols[1].number_input("Latent variables", min_value=0, value=3, step=1)
    population_text = cols[0].text_input("Population size (optional)", value="")
    margin = cols[1].number_input("Error margin", min_value=0.01, max_value=0.5, value=0.05, step=0.01)
    try:
        result = estimate_sample_size(int(observed), int(latent), parse_population(population_text), margin)
    except ValueError as exc:
        st.error(str(exc))
        return
    metrics = st.columns(4)
    metrics[0].metric("10x rule", result["rule_10x"])
    metrics[1].metric("20x rule", result["rule_20x"])
    metrics[2].metric("Kline minimum", result["kline_minimum"])
    metrics[3].metric("Yamane", result["yamane"] if result["yamane"] is not None else "N/A")
    st.success(f"Recommended minimum sample size: {result['recommended']}")


def render_validity() -> None:
    st.subheader("Validity Calculator (AVE / CR)")
    loadings = st.session_state.loadings
    for index, loading in enumerate(loadings):
        col_value, col_remove = st.columns([4, 1])
        value = col_value.number_input(
            f"Loading {index + 1}",
            min_value=0.0,
            max_value=1.0,
            value=float(loading),
            step=0.01,
            key=f"loading_{index}_{len(loadings)}",
        )
        if value != loading:
            st.session_state.loadings = update_loading(loadings, index, value)
        if col_remove.button("Remove", key=f"remove_loading_{index}", disabled=len(loadings) <= 1):
            st.session_state.loadings = remove_loading(loadings, index)
            st.rerun()
    col_add, col_reset = st.columns(2)
    if col_add.button("Add loading", use_container_width=True):
        st.session_state.loadings = add_loading(st.session_state.loadings)
        st.rerun()
    if col_reset.button("Reset", use_container_width=True):
        st.session_state.loadings = list(RESET_LOADINGS)
        st.rerun()
    try:
        result = compute_validity(st.session_state.loadings)
    except ValueError as exc:
        st.error(str(exc))
        return
    metrics = st.columns(2)
    metrics[0].metric("AVE", f"{result['ave']:.4f}", "pass (>= 0.50)" if result["ave_pass"] else "fail (< 0.50)")
    metrics[1].metric("CR", f"{result['cr']:.4f}", "pass (>= 0.70)" if result["cr_pass"] else "fail (< 0.70)")


def render_checklist(checklist: SemChecklist) -> None:
    st.subheader("SEM Research Checklist")
    progress = checklist.progress()
    st.progress(progress / 100.0, text=f"{progress}% complete")
    for section in SEM_SECTIONS:
        counts = checklist.section_progress(section["id"])
        with st.expander(f"{section['title']} ({counts['done']}/{counts['total']})", expanded=section["id"] == "phase1"):
            for item in section["items"]:
                checked = checklist.is_checked(item["id"])
                if st.checkbox(
                    f"{item['id']} {item['label']}",
                    value=checked,
                    help=item.get("description"),
                    key=f"check_{item['id']}",
                ) != checked:
                    checklist.toggle(item["id"])
                    st.rerun()
    if st.button("Reset progress") or replay_requested("reset_checklist"):
        run_gated("reset_checklist", lambda confirm: reset_checklist(checklist, confirm))


def reset_checklist(checklist: SemChecklist, confirm) -> bool:
    if not checklist.reset(confirm):
        return False
    for section in SEM_SECTIONS:
        for item in section["items"]:
            st.session_state.pop(f"check_{item['id']}", None)
    return True


def render_tools(editor: DiagramEditor, checklist: SemChecklist) -> None:
    st.radio(
        "Tool",
        TOOLS,
        format_func=TOOL_LABELS.get,
        horizontal=True,
        key="active_tool",
        label_visibility="collapsed",
    )
    tool = st.session_state.active_tool
    if tool == "conceptual":
        render_canvas(editor)
    elif tool == "fit_checker":
        render_fit_checker()
    elif tool == "apa_table":
        render_apa_table()
    elif tool == "jamovi":
        render_jamovi(editor)
    elif tool == "sample_size":
        render_sample_size()
    elif tool == "validity":
        render_validity()
    elif tool == "checklist":
        render_checklist(checklist)


logging.basicConfig(
    level=os.getenv("DRSEM_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="Dr.SEM", layout="wide")
ensure_state()

chat_session: ChatSession = st.session_state.chat
chat_session.client = get_runtime_llm_client()

render_sidebar(chat_session)
st.markdown(theme_css(st.session_state.theme), unsafe_allow_html=True)
st.title("Dr.SEM Research Assistant")

if not chat_session.client.is_enabled():
    chat_session.api_key_missing = True
if chat_session.api_key_missing:
    render_api_key_screen(chat_session)
    st.stop()

render_pending_confirm()
render_flash()

chat_col, tools_col = st.columns([2, 3])
with chat_col:
    render_chat(chat_session)
with tools_col:
    render_tools(st.session_state.editor, st.session_state.checklist)

st.markdown(
    f"<div class='drsem-footer'>{html.escape(get_strings(st.session_state.language)['footer'])}</div>",
    unsafe_allow_html=True,
)
