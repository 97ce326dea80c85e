"""Orchestration.

- map_state: pure source/layer state and transition planners
- map_session: async session wiring activities, planners and the map shell
"""
