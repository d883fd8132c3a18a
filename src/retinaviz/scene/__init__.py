"""Scene assembly: load order, error aggregation and renderer registration."""
