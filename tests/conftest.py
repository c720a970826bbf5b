import matplotlib

# Figures are built but never shown during tests.
matplotlib.use("Agg")
