"""K-means clustering tab."""

import logging

import pandas as pd
import streamlit as st

from app.config.defaults import BOUNDS, DEFAULT_N_CLUSTERS, MAX_ELBOW_K
from app.utils.charts import create_cluster_scatter, create_elbow_chart
from app.utils.validators import validate_clustering_widget
from folio_core.ml.kmeans import KMeans, inertia_curve
from folio_core.utils.constants import DEFAULT_RANDOM_STATE

logger = logging.getLogger(__name__)


def render() -> None:
    """Upload a CSV, pick numeric features and cluster the rows."""
    uploaded = st.file_uploader("Upload a CSV table", type=["csv"], key="cluster_csv")
    if uploaded is None:
        st.info("Upload a CSV with numeric columns to cluster its rows.")
        return

    data = pd.read_csv(uploaded)
    numeric_columns = data.select_dtypes("number").columns.tolist()
    if not numeric_columns:
        st.error("The uploaded table has no numeric columns.")
        return

    features = st.multiselect(
        "Feature columns",
        options=numeric_columns,
        default=numeric_columns[:2],
        key="cluster_features",
    )
    n_clusters = st.slider(
        "Number of clusters (k)",
        min_value=BOUNDS["n_clusters"][0],
        max_value=BOUNDS["n_clusters"][1],
        value=DEFAULT_N_CLUSTERS,
        key="cluster_k",
    )
    standardize = st.checkbox("Standardize features", value=True, key="cluster_standardize")

    features_df = data[features].dropna() if features else pd.DataFrame()
    errors = validate_clustering_widget(features, n_clusters, len(features_df))
    for error in errors:
        st.error(error)
    if errors:
        return

    X = features_df
    if standardize:
        std = X.std(ddof=0).replace(0, 1.0)
        X = (X - X.mean()) / std

    try:
        model = KMeans(n_clusters=n_clusters, random_state=DEFAULT_RANDOM_STATE).fit(X)
    except ValueError as e:
        logger.error(f"Clustering failed: {e}")
        st.error(str(e))
        return

    st.metric("Inertia", f"{model.inertia_:.2f}")

    if len(features) >= 2:
        x_col, y_col = features[0], features[1]
        centers = pd.DataFrame(model.cluster_centers_, columns=features)
        if standardize:
            centers = centers * std + features_df.mean()
        st.plotly_chart(
            create_cluster_scatter(features_df, x_col, y_col, model.labels_, centers),
            use_container_width=True,
        )

    max_k = min(MAX_ELBOW_K, len(X))
    st.plotly_chart(
        create_elbow_chart(inertia_curve(X, range(1, max_k + 1), random_state=DEFAULT_RANDOM_STATE)),
        use_container_width=True,
    )

    labeled = features_df.assign(cluster=model.labels_)
    st.dataframe(labeled.groupby("cluster").mean(), use_container_width=True)
