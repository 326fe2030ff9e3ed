"""HTTP routers for the visualizer service."""
