"""Domain pipelines: synthetic sales history and revenue forecasting."""
