"""FuelEU Compliance Engine - Services"""
