import pandas as pd
import streamlit as st

from workbench.entities import Project
from workbench.logging_setup import setup_logging
from workbench.projects import (
    add_project,
    delete_project,
    fetch_all_projects,
    fetch_project_by_id,
    modify_project_details,
    parse_decimal,
    parse_int,
    parse_text,
)
from workbench.results import capture

setup_logging()

# --- 페이지 설정 ---
st.set_page_config(page_title="DIY Projects", layout="wide", page_icon="🛠️")
st.markdown("""
<style>
    .stDeployButton {display:none;}
    h1 { margin-bottom: 2rem; }
</style>
""", unsafe_allow_html=True)
st.title("🛠️ DIY Projects")

# --- 세션 상태 초기화 ---
# Only the selected id lives in the session; the project is reloaded per run.
if "current_project_id" not in st.session_state:
    st.session_state.current_project_id = None

OPERATIONS = [
    "List projects",
    "Add a project",
    "Select a project",
    "Update project details",
    "Delete a project",
]


# --- 헬퍼 함수 ---
def _show_error(result):
    if result.not_found:
        st.warning(result.message)
    else:
        st.error(f"Error: {result.message} Try again.")


def _load_current_project(project_id):
    """Reload the selected project, clearing the selection if it is gone."""
    if project_id is None:
        return None
    result = capture(fetch_project_by_id, project_id)
    if result.ok:
        return result.value
    if result.not_found:
        st.session_state.current_project_id = None
    _show_error(result)
    return None


def _projects_frame(projects):
    df = pd.DataFrame(
        [{"ID": p.project_id, "Name": p.project_name} for p in projects],
        columns=["ID", "Name"],
    )
    return df


def _list_projects():
    result = capture(fetch_all_projects)
    if not result.ok:
        _show_error(result)
        return []
    projects = result.value
    if projects:
        st.dataframe(_projects_frame(projects), hide_index=True, use_container_width=True)
    else:
        st.info("No projects yet.")
    return projects


def _parse_inputs(**raw_values):
    """Parse form input; returns (values, error message)."""
    try:
        return {
            "project_name": parse_text(raw_values.get("project_name")),
            "estimated_hours": parse_decimal(raw_values.get("estimated_hours")),
            "actual_hours": parse_decimal(raw_values.get("actual_hours")),
            "difficulty": parse_int(raw_values.get("difficulty")),
            "notes": parse_text(raw_values.get("notes")),
        }, None
    except ValueError as e:
        return None, str(e)


def _create_project():
    with st.form("add_project", clear_on_submit=True):
        name = st.text_input("Project name")
        estimated = st.text_input("Estimated hours")
        actual = st.text_input("Actual hours")
        difficulty = st.text_input("Difficulty (1-5)")
        notes = st.text_area("Notes")
        submitted = st.form_submit_button("Add")

    if not submitted:
        return
    values, error = _parse_inputs(project_name=name, estimated_hours=estimated,
                                  actual_hours=actual, difficulty=difficulty, notes=notes)
    if error:
        st.error(error)
        return
    if values["project_name"] is None:
        st.error("A project name is required.")
        return

    result = capture(add_project, Project(**values))
    if result.ok:
        st.success(f"You have successfully created project: {result.value.project_id}")
        st.text(str(result.value))
    else:
        _show_error(result)


def _select_project():
    projects = _list_projects()
    if not projects:
        return
    ids = [p.project_id for p in projects]
    selected = st.selectbox(
        "Project",
        options=ids,
        format_func=lambda pid: f"{pid}: " + next(p.project_name for p in projects if p.project_id == pid),
    )
    if st.button("Select"):
        result = capture(fetch_project_by_id, selected)
        if result.ok:
            st.session_state.current_project_id = result.value.project_id
            st.rerun()
        else:
            _show_error(result)


def _update_project_details(current):
    if current is None:
        st.info("Please select a project.")
        return

    st.caption("Leave a field blank to keep the current value.")
    with st.form("update_project"):
        name = st.text_input(f"Project name [It was: {current.project_name}]")
        estimated = st.text_input(f"Estimated hours [It was: {current.estimated_hours}]")
        actual = st.text_input(f"Actual hours [It was: {current.actual_hours}]")
        difficulty = st.text_input(f"Difficulty (1-5) [It was: {current.difficulty}]")
        notes = st.text_area(f"Notes [It was: {current.notes}]")
        submitted = st.form_submit_button("Update")

    if not submitted:
        return
    values, error = _parse_inputs(project_name=name, estimated_hours=estimated,
                                  actual_hours=actual, difficulty=difficulty, notes=notes)
    if error:
        st.error(error)
        return

    result = capture(modify_project_details, current.with_details(**values))
    if result.ok:
        st.success(f"Project ID={current.project_id} was updated.")
        st.rerun()
    else:
        _show_error(result)


def _delete_project(current_project_id):
    projects = _list_projects()
    if not projects:
        return
    project_id = st.selectbox("Project to delete", options=[p.project_id for p in projects])
    if st.button("Delete", type="primary"):
        result = capture(delete_project, project_id)
        if result.ok:
            if current_project_id == project_id:
                st.session_state.current_project_id = None
            st.toast(f"Project ID={project_id} was deleted.")
            st.rerun()
        else:
            _show_error(result)


# --- 메인 로직 ---
current_project = _load_current_project(st.session_state.current_project_id)

with st.sidebar:
    operation = st.radio("Menu", options=OPERATIONS, key="sidebar_nav_projects")
    st.divider()
    if current_project is None:
        st.write("You are not working with a project.")
    else:
        st.write("You are working with project:")
        st.text(str(current_project))

st.subheader(operation)

if operation == "List projects":
    _list_projects()
elif operation == "Add a project":
    _create_project()
elif operation == "Select a project":
    _select_project()
elif operation == "Update project details":
    _update_project_details(current_project)
elif operation == "Delete a project":
    _delete_project(st.session_state.current_project_id)
