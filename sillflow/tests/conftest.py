import matplotlib

# Plots are written to files only
matplotlib.use('Agg')
