import matplotlib

matplotlib.use("Agg") # charts are written to files only
