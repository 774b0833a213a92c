"""Chart builders for growth results (Plotly for the UI, Matplotlib for PNG export)."""
