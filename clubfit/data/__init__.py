from clubfit.data.seed_clubs import SEED_CLUBS

__all__ = ["SEED_CLUBS"]
