"""Summary engine services (layout -> keys -> aggregation -> rollups -> assembly)
and the batch orchestration around them."""
