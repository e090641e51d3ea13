"""AquaERP REST API: sales, purchasing, credit tracking and cash/bank ledgers."""
