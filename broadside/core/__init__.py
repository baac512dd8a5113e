"""Pure game rules: boards, fleets, shot resolution."""
