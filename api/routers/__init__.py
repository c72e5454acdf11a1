"""
Routery API: game (sesja bitwy) i catalog (szablony, umiejętności, siatka).
"""
