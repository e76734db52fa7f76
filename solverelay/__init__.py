"""SolveRelay: relay problems to LLMs and normalize their answers into fixed JSON records."""
