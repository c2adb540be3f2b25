"""Virtual contest orchestration: resolution, dispatch, runners."""
