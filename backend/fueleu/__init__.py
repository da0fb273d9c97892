"""FuelEU Compliance Engine - Compliance Balance, banking and pooling backend."""
