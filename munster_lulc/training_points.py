"""
Hand-labelled ground control points for the four LULC classes.
(lon, lat) pairs, WGS84.
"""

URBAN_POINTS = [
    (7.04036, 52.07929),
    (6.82526, 52.03517),
    (7.19032, 52.0148),
    (7.66434, 51.99336),
    (7.63613, 51.95739),
    (7.64021, 51.92892),
    (7.85813, 51.92606),
    (8.03777, 51.75512),
    (7.90542, 51.7666),
    (7.07777, 51.68644),
    (6.89741, 51.98877),
    (8.02864, 51.85225),
    (7.08803, 51.52923),
    (6.96564, 51.56862),
    (7.15189, 51.56841),
    (7.27755, 51.63292),
    (7.41985, 51.62769),
    (7.39222, 51.70248),
    (7.03764, 52.0828),
    (7.55644, 52.14728),
]

AGRICULTURE_POINTS = [
    (7.04722, 51.68213),
    (7.31237, 51.66109),
    (7.06964, 51.62956),
    (6.89591, 51.6499),
    (6.86518, 52.05104),
    (7.33364, 52.02944),
    (7.69917, 52.166),
    (7.21872, 52.23704),
    (7.79199, 52.32699),
    (7.34673, 52.25778),
    (7.47739, 52.13601),
    (7.76777, 52.13638),
    (7.63851, 52.12448),
    (7.6107, 52.1923),
    (7.5626, 52.239),
    (7.4954, 52.318),
    (7.74337, 52.34409),
    (7.91537, 52.35531),
    (7.48939, 52.31534),
    (7.68165, 52.38596),
]

WATER_POINTS = [
    (7.33967, 52.23663),
    (7.2211, 51.7986),
    (7.1919, 51.7986),
    (7.61341, 51.95577),
    (7.65699, 51.8863),
    (7.6327, 51.89088),
    (7.51039, 51.85612),
    (8.01412, 51.82164),
    (6.63716, 51.82836),
    (7.65308, 52.25013),
    (7.2419, 51.7978),
    (7.29688, 51.74488),
    (7.20916, 51.73914),
    (7.10645, 51.70395),
    (7.13513, 51.56954),
    (7.26324, 51.56798),
    (6.97047, 51.54632),
    (7.01123, 51.6625),
    (6.96411, 51.67984),
    (7.6582, 51.88807),
]

VEGETATION_POINTS = [
    (7.71887, 52.2408),
    (7.88949, 52.25052),
    (7.35722, 52.14552),
    (7.26212, 52.14078),
    (7.80117, 52.09588),
    (7.63725, 51.86111),
    (7.31045, 51.82914),
    (7.1669, 51.6863),
    (6.94785, 51.70734),
    (7.35601, 51.64067),
    (7.4952, 51.88118),
    (7.8611, 51.8798),
    (7.26752, 52.14647),
    (7.68036, 52.25756),
    (7.43111, 52.29842),
    (7.08624, 52.20857),
    (7.02891, 52.03054),
    (6.81231, 52.0092),
    (7.1155, 51.9217),
    (7.2497, 51.916),
]

# class value -> points
TRAINING_POINTS = {
    0: URBAN_POINTS,
    1: AGRICULTURE_POINTS,
    2: WATER_POINTS,
    3: VEGETATION_POINTS,
}
