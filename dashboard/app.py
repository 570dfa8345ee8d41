"""
Streamlit Dashboard for the Weather Likelihood Platform

Interactive dashboard for exploring weather condition likelihoods.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from datetime import date
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.api_connectors import NominatimConnector, OpenMeteoConnector, OpenMeteoError
from src.likelihood_scoring import LikelihoodScorer, probability_color
from src.likelihood_scoring import export

# Page configuration
st.set_page_config(
    page_title="Weather Likelihood Dashboard",
    page_icon="🌦️",
    layout="wide",
    initial_sidebar_state="expanded"
)

POPULAR_LOCATIONS = {
    "New York, USA": (40.7128, -74.006),
    "London, UK": (51.5074, -0.1278),
    "Tokyo, Japan": (35.6762, 139.6503),
    "Sydney, Australia": (-33.8688, 151.2093),
}

CONDITION_ICONS = {
    "Sunny": "🌡️",
    "Cold": "❄️",
    "Rainy": "🌧️",
    "Windy": "💨",
    "Stormy": "⛈️",
    "Uncomfortable": "⚠️",
}


# Initialize connectors
@st.cache_resource
def get_connectors():
    return {
        "geocoder": NominatimConnector(),
        "weather": OpenMeteoConnector(),
        "scorer": LikelihoodScorer()
    }

connectors = get_connectors()


def load_conditions(lat, lon, day, include_composites=True):
    """Fetch and score one day, reporting failures in the UI"""
    try:
        reading = connectors["weather"].get_daily(lat, lon, day)
    except OpenMeteoError as e:
        st.error(e.reason)
        return []

    if reading is None:
        st.error("Error fetching weather data")
        return []

    return connectors["scorer"].build_conditions(reading, include_composites=include_composites)


# Title and description
st.title("🌦️ Weather Likelihood Dashboard")
st.markdown("**How likely is it to be sunny, cold, rainy, windy, stormy or uncomfortable?**")

# Sidebar
st.sidebar.header("Configuration")

st.sidebar.subheader("📍 Location")
search_term = st.sidebar.text_input("Search location", value=st.session_state.get("location_name", ""))
selected_date = st.sidebar.date_input("Date", value=date.today())

st.sidebar.subheader(" Popular Locations")
col1, col2 = st.sidebar.columns(2)
for i, (name, coords) in enumerate(POPULAR_LOCATIONS.items()):
    column = col1 if i % 2 == 0 else col2
    if column.button(name):
        st.session_state.coords = coords
        st.session_state.location_name = name

if st.sidebar.button(" Search", type="primary"):
    if not search_term:
        st.sidebar.info("Please enter a location to search.")
    else:
        with st.spinner("Looking up location..."):
            hit = connectors["geocoder"].search(search_term)
        if hit:
            st.session_state.coords = (hit["lat"], hit["lon"])
            st.session_state.location_name = hit["display_name"]
            st.sidebar.success(f"Location found: {hit['display_name']}")
        else:
            st.sidebar.error("Location not found")

st.sidebar.subheader("⚙️ View")
view_mode = st.sidebar.radio("Mode", ["current", "forecast"], horizontal=True)
selected_metric = st.sidebar.selectbox(
    "Metric", ["all"] + LikelihoodScorer.CONDITIONS
)

# Main content
if "coords" in st.session_state:
    lat, lon = st.session_state.coords
    location_name = st.session_state.location_name

    with st.spinner("Fetching weather data..."):
        conditions = load_conditions(lat, lon, selected_date)

    if conditions:
        scorer = connectors["scorer"]

        # Alerts banner
        for alert in scorer.build_alerts(conditions, location_name):
            st.warning(f"⚠️ {alert['message']}")

        left, right = st.columns([1, 3])

        with left:
            st.subheader("🗺️ Location")
            st.map(pd.DataFrame({"lat": [lat], "lon": [lon]}), zoom=8)
            st.caption(location_name)

            dominant = scorer.dominant_condition(conditions)
            st.subheader("Dominant Condition")
            st.metric(
                label=f"{CONDITION_ICONS.get(dominant.condition, '')} {dominant.condition}",
                value=f"{dominant.probability}%",
                delta=dominant.severity,
                delta_color="off"
            )

            st.subheader("⬇️ Export")
            st.download_button(
                "Download CSV",
                export.to_csv(conditions, location_name, selected_date),
                file_name="weather-likelihood-data.csv",
                mime="text/csv"
            )
            st.download_button(
                "Download JSON",
                export.to_json(conditions, location_name, selected_date),
                file_name="weather-likelihood-data.json",
                mime="application/json"
            )

        with right:
            st.subheader(f" Likelihoods for {selected_date:%B %d, %Y}")

            shown = [c for c in conditions if selected_metric in ("all", c.condition)]
            cols = st.columns(3)
            for i, record in enumerate(shown):
                with cols[i % 3]:
                    st.metric(
                        label=f"{CONDITION_ICONS.get(record.condition, '')} {record.condition}",
                        value=f"{record.probability}%",
                        delta=record.severity,
                        delta_color="off"
                    )
                    st.caption(record.description)

            tab1, tab2, tab3 = st.tabs(["📈 Likelihoods", "📅 Forecast", "🔀 Compare"])

            with tab1:
                fig = go.Figure(go.Bar(
                    x=[c.condition for c in conditions],
                    y=[c.probability for c in conditions],
                    marker_color=[probability_color(c.probability) for c in conditions],
                    customdata=[c.actual_value for c in conditions],
                    hovertemplate="%{x}: %{y}%<br>Value: %{customdata}<extra></extra>"
                ))
                fig.update_layout(
                    title="Condition Likelihoods",
                    yaxis_title="Likelihood (%)",
                    yaxis_range=[0, 100]
                )
                st.plotly_chart(fig, use_container_width=True)

                summary = scorer.summarize(conditions)
                col1, col2, col3 = st.columns(3)
                col1.metric("Average Likelihood", f"{summary['average_probability']}%")
                col2.metric("High Severity", summary["severity_distribution"]["high"])
                col3.metric("Medium Severity", summary["severity_distribution"]["medium"])

            with tab2:
                if view_mode == "forecast":
                    try:
                        forecast = connectors["weather"].get_forecast(lat, lon)
                    except OpenMeteoError as e:
                        st.error(e.reason)
                        forecast = pd.DataFrame()

                    if not forecast.empty:
                        forecast = scorer.score_forecast(forecast)

                        fig = px.line(
                            forecast,
                            x="date",
                            y=["max_temp", "min_temp", "precipitation", "wind_speed"],
                            title="7-Day Forecast",
                            labels={"value": "Value", "date": "Date", "variable": "Measure"}
                        )
                        st.plotly_chart(fig, use_container_width=True)

                        day_cols = st.columns(len(forecast))
                        for col, (_, day) in zip(day_cols, forecast.iterrows()):
                            col.markdown(f"**{day['date']:%b %d}**")
                            col.write(day["condition"])
                            col.caption(f"{day['max_temp']}° / {day['min_temp']}°")
                    else:
                        st.info("No forecast data available.")
                else:
                    st.info("Switch the view mode to **forecast** to load the 7-day forecast.")

            with tab3:
                other = st.text_input("Compare with location")
                if other:
                    hit = connectors["geocoder"].search(other)
                    if hit is None:
                        st.error("Location not found")
                    else:
                        primary = [c for c in conditions if c.condition in LikelihoodScorer.PRIMARY_CONDITIONS]
                        others = load_conditions(hit["lat"], hit["lon"], selected_date, include_composites=False)
                        if others:
                            result = scorer.compare(primary, [(hit["display_name"], others)])[0]
                            table = pd.DataFrame({
                                "Condition": [c.condition for c in primary],
                                location_name: [c.probability for c in primary],
                                result["location"]: [c["probability"] for c in result["conditions"]],
                                "Difference": [result["deltas"][c.condition] for c in primary],
                            })
                            st.dataframe(table, use_container_width=True, hide_index=True)

else:
    # Instructions
    st.info("👈 Search for a location in the sidebar or pick a popular one to begin.")

    st.markdown("""
    ### About This Dashboard

    Likelihoods are derived from daily weather data:

    - **Nominatim (OpenStreetMap)**: Location search
    - **Open-Meteo**: Forecast and historical daily weather

    Each condition is scored 0-100 by mapping the relevant measurement onto a
    calibration window, then bucketed into low / medium / high severity.

    ### How to Use

    1. Search for a location (or use a popular location button)
    2. Pick a date; older dates are served from the historical archive
    3. Review the likelihood cards, chart and alerts
    4. Switch to forecast mode or compare with another location
    """)

# Footer
st.sidebar.markdown("---")
st.sidebar.markdown("""
**Weather Likelihood Dashboard**
Version 1.0.0
Data Sources: Nominatim, Open-Meteo
""")
