"""The "to-upper" dApp: upper-cases submitted sentences and keeps a tally."""
