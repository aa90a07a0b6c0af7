import streamlit as st

from recipe_remix.agents import FavoritesStore, MealAgent, MealDisplayAgent, RemixAgent, remix_current
from recipe_remix.agents.display_agent import LOADING_MESSAGE, LOADING_RECIPE_MESSAGE
from recipe_remix.agents.remix_agent import REMIX_THEMES
from recipe_remix.config import Settings
from recipe_remix.logger import configure_logging
from recipe_remix.schema import DisplayState, Meal
from recipe_remix.storage import JsonFileStore

settings = Settings.from_env()
configure_logging(settings.log_level, settings.log_file)


@st.cache_resource
def get_agents(_settings: Settings):
    meal_agent = MealAgent(_settings.mealdb_base_url, timeout=_settings.http_timeout)
    display_agent = MealDisplayAgent(meal_agent)
    remix_agent = RemixAgent(
        api_key=_settings.openai_api_key,
        model_name=_settings.remix_model,
        max_tokens=_settings.remix_max_tokens,
        base_url=_settings.openai_base_url,
        timeout=_settings.http_timeout,
    )
    favorites = FavoritesStore(JsonFileStore(_settings.favorites_path))
    return display_agent, remix_agent, favorites


display_agent, remix_agent, favorites = get_agents(settings)

if "display_state" not in st.session_state:
    st.session_state.display_state = DisplayState()
    st.session_state.page_loaded = False


def show_random():
    with st.spinner(LOADING_MESSAGE):
        st.session_state.display_state = display_agent.fetch_random(st.session_state.display_state)


def show_by_name(name: str):
    with st.spinner(LOADING_RECIPE_MESSAGE):
        st.session_state.display_state = display_agent.fetch_by_name(st.session_state.display_state, name)


def save_meal(meal: Meal):
    favorites.add(meal)


def delete_favorite(index: int, entries):
    favorites.remove_at(index, entries)


# First load shows a random recipe right away
if not st.session_state.page_loaded:
    st.session_state.page_loaded = True
    show_random()

# Streamlit UI
st.title("🍲 Recipe Remix")
st.button("Surprise me with a random recipe", on_click=show_random)

state: DisplayState = st.session_state.display_state
st.markdown(state.display_html, unsafe_allow_html=True)

# Save is bound to the meal rendered in this run, not whatever is current at click time
if state.meal is not None:
    st.button("Save Recipe", key=f"save-{state.meal.idMeal}", on_click=save_meal, args=(state.meal,))

# Saved recipes
view = favorites.render()
if view.visible:
    st.subheader("⭐ Saved Recipes")
    for idx, entry in enumerate(view.entries):
        thumb_col, name_col, delete_col = st.columns([1, 6, 1])
        if entry.thumb:
            thumb_col.image(entry.thumb, width=40)
        name_col.button(entry.name, key=f"open-{idx}", on_click=show_by_name, args=(entry.name,))
        delete_col.button("✕", key=f"delete-{idx}", help="Delete", on_click=delete_favorite, args=(idx, view.entries))

# Remix
st.subheader("🎨 Remix this recipe")
theme = st.selectbox("Remix theme", REMIX_THEMES)
if st.button("Remix"):
    with st.spinner(remix_agent.loading_message()):
        st.session_state.display_state = remix_current(st.session_state.display_state, theme, remix_agent)

if st.session_state.display_state.remix_html:
    st.markdown(st.session_state.display_state.remix_html, unsafe_allow_html=True)
