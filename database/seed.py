"""
Database seed data.
Initial data population for fresh database installations.
"""

# (model, brand, year, motor, wheel_size, last_service)
SAMPLE_UNITS = [
    ('XR-500', 'MobilityPlus', 2022, '350W', '12"', '2023-01-15'),
    ('CT-200', 'EasyRide', 2021, '280W', '10"', '2023-02-10'),
    ('ZT-800', 'PowerMove', 2023, '450W', '14"', '2023-03-05'),
    ('EV-100', 'MobilityPlus', 2022, '300W', '12"', '2023-01-20'),
    ('LX-400', 'ComfortGlide', 2021, '320W', '11"', '2023-02-15'),
    ('RT-600', 'PowerMove', 2023, '400W', '13"', '2023-03-10'),
    ('JN-300', 'MobilityPlus', 2022, '280W', '10"', '2023-01-25'),
    ('FT-700', 'EasyRide', 2021, '420W', '14"', '2023-02-20'),
    ('GX-250', 'ComfortGlide', 2023, '270W', '11"', '2023-03-15'),
    ('VZ-150', 'PowerMove', 2022, '250W', '10"', '2023-01-30'),
    ('KS-550', 'MobilityPlus', 2021, '380W', '12"', '2023-02-25'),
    ('PT-900', 'EasyRide', 2023, '470W', '15"', '2023-03-20'),
    ('DL-350', 'ComfortGlide', 2022, '310W', '11"', '2023-01-05'),
    ('QR-450', 'PowerMove', 2021, '340W', '12"', '2023-02-05'),
    ('BZ-650', 'MobilityPlus', 2023, '410W', '13"', '2023-03-25'),
]


def seed_database(db):
    """Insert initial seed data."""

    # 1. Sample wheelchair fleet
    for model, brand, year, motor, wheel_size, last_service in SAMPLE_UNITS:
        db.execute('''
            INSERT INTO units (model, brand, year, motor, wheel_size, last_service)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (model, brand, year, motor, wheel_size, last_service))
