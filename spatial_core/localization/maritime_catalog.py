"""
Static maritime reference tables.

CRUISE_PORTS: cruise port areas (center and radius in meters); a fix inside an
area counts as near that port.

COASTLINES: coarse coastline reference points; radius approximates the land
mass so that max(0, distance - radius) estimates distance from land.
"""

from typing import NamedTuple, Tuple


class MaritimeArea(NamedTuple):
    name: str
    lat: float
    lng: float
    radius: float


CRUISE_PORTS: Tuple[MaritimeArea, ...] = (
    # NORTH AMERICA - ATLANTIC
    MaritimeArea('Miami Port', 25.7612, -80.1923, 2000),
    MaritimeArea('Port Canaveral', 28.4108, -80.6036, 2000),
    MaritimeArea('Fort Lauderdale', 26.1224, -80.1373, 2000),
    MaritimeArea('Jacksonville Port', 30.3322, -81.6557, 2000),
    MaritimeArea('Charleston Port', 32.7765, -79.9311, 2000),
    MaritimeArea('Baltimore Port', 39.2904, -76.6122, 2000),
    MaritimeArea('New York Port', 40.7589, -73.9851, 2000),
    MaritimeArea('Boston Port', 42.3601, -71.0589, 2000),
    MaritimeArea('Portland Maine', 43.6591, -70.2568, 2000),
    # NORTH AMERICA - GULF
    MaritimeArea('Galveston Port', 29.3013, -94.7977, 2000),
    MaritimeArea('New Orleans Port', 29.9511, -90.0715, 2000),
    MaritimeArea('Mobile Port', 30.6944, -88.0399, 2000),
    MaritimeArea('Tampa Port', 27.9506, -82.4572, 2000),
    # NORTH AMERICA - PACIFIC
    MaritimeArea('San Diego Port', 32.7157, -117.1611, 2000),
    MaritimeArea('Los Angeles Port', 33.7701, -118.1937, 2000),
    MaritimeArea('Long Beach Port', 33.7701, -118.1937, 2000),
    MaritimeArea('San Francisco Port', 37.7749, -122.4194, 2000),
    MaritimeArea('Seattle Port', 47.6062, -122.3321, 2000),
    MaritimeArea('Vancouver Port', 49.2827, -123.1207, 2000),
    # ALASKA & PACIFIC NORTHWEST
    MaritimeArea('Anchorage Port', 61.2181, -149.9003, 2000),
    MaritimeArea('Whittier Port', 60.7741, -148.6858, 2000),
    MaritimeArea('Seward Port', 60.1042, -149.4422, 2000),
    MaritimeArea('Juneau Port', 58.3019, -134.4197, 2000),
    MaritimeArea('Ketchikan Port', 55.3422, -131.6461, 2000),
    MaritimeArea('Skagway Port', 59.4582, -135.3140, 2000),
    MaritimeArea('Sitka Port', 57.0531, -135.3300, 2000),
    MaritimeArea('Victoria BC', 48.4284, -123.3656, 2000),
    # HAWAII & PACIFIC ISLANDS
    MaritimeArea('Honolulu Port', 21.3099, -157.8581, 2000),
    MaritimeArea('Maui Kahului', 20.8947, -156.4700, 2000),
    MaritimeArea('Kauai Nawiliwili', 21.9544, -159.3561, 2000),
    MaritimeArea('Kona Port', 19.6400, -155.9969, 2000),
    MaritimeArea('Hilo Port', 19.7297, -155.0890, 2000),
    MaritimeArea('Papeete Tahiti', -17.5516, -149.5585, 2000),
    MaritimeArea('Bora Bora', -16.5004, -151.7415, 1500),
    MaritimeArea('Moorea', -17.5388, -149.8295, 1500),
    MaritimeArea('Fiji Suva', -18.1416, 178.4419, 2000),
    MaritimeArea('Samoa Apia', -13.8507, -171.7514, 2000),
    # ASIA PACIFIC
    MaritimeArea('Tokyo Port', 35.6762, 139.6503, 2000),
    MaritimeArea('Yokohama Port', 35.4437, 139.6380, 2000),
    MaritimeArea('Osaka Port', 34.6937, 135.5023, 2000),
    MaritimeArea('Kobe Port', 34.6901, 135.1956, 2000),
    MaritimeArea('Nagasaki Port', 32.7448, 129.8737, 2000),
    MaritimeArea('Shanghai Port', 31.2304, 121.4737, 2000),
    MaritimeArea('Tianjin Port', 39.0842, 117.2009, 2000),
    MaritimeArea('Hong Kong Port', 22.3193, 114.1694, 2000),
    MaritimeArea('Singapore Port', 1.2966, 103.8558, 2000),
    MaritimeArea('Busan Korea', 35.1796, 129.0756, 2000),
    MaritimeArea('Incheon Korea', 37.4563, 126.7052, 2000),
    MaritimeArea('Vladivostok Russia', 43.1155, 131.8855, 2000),
    # SOUTHEAST ASIA
    MaritimeArea('Bangkok Laem Chabang', 13.0827, 100.8782, 2000),
    MaritimeArea('Ho Chi Minh Phu My', 10.5733, 107.0342, 2000),
    MaritimeArea('Manila Port', 14.5995, 120.9842, 2000),
    MaritimeArea('Bali Benoa', -8.7467, 115.2213, 2000),
    MaritimeArea('Jakarta Port', -6.0944, 106.8451, 2000),
    MaritimeArea('Penang Malaysia', 5.4141, 100.3288, 2000),
    MaritimeArea('Kuala Lumpur Port Klang', 3.0000, 101.4000, 2000),
    # AUSTRALIA & NEW ZEALAND
    MaritimeArea('Sydney Port', -33.8688, 151.2093, 2000),
    MaritimeArea('Melbourne Port', -37.8136, 144.9631, 2000),
    MaritimeArea('Brisbane Port', -27.4698, 153.0251, 2000),
    MaritimeArea('Cairns Port', -16.9186, 145.7781, 2000),
    MaritimeArea('Perth Fremantle', -32.0569, 115.7439, 2000),
    MaritimeArea('Adelaide Port', -34.9285, 138.6007, 2000),
    MaritimeArea('Hobart Tasmania', -42.8821, 147.3272, 2000),
    MaritimeArea('Auckland Port', -36.8485, 174.7633, 2000),
    MaritimeArea('Wellington Port', -41.2865, 174.7762, 2000),
    MaritimeArea('Christchurch Port', -43.5321, 172.6362, 2000),
    MaritimeArea('Dunedin Port', -45.8788, 170.5028, 2000),
    # CARIBBEAN
    MaritimeArea('Nassau Bahamas', 25.0443, -77.3504, 2000),
    MaritimeArea('Freeport Bahamas', 26.5333, -78.7000, 2000),
    MaritimeArea('Cozumel Mexico', 20.5083, -86.9458, 2000),
    MaritimeArea('Costa Maya Mexico', 18.7356, -87.6987, 2000),
    MaritimeArea('Jamaica Ocho Rios', 18.4078, -77.1031, 2000),
    MaritimeArea('Jamaica Montego Bay', 18.4762, -77.8939, 2000),
    MaritimeArea('Grand Cayman', 19.3133, -81.2546, 2000),
    MaritimeArea('St Thomas USVI', 18.3381, -64.8941, 2000),
    MaritimeArea('St Maarten', 18.0425, -63.0548, 2000),
    MaritimeArea('Barbados Port', 13.0969, -59.6145, 2000),
    MaritimeArea('Aruba Oranjestad', 12.5186, -70.0358, 2000),
    MaritimeArea('Curacao Willemstad', 12.1084, -68.9335, 2000),
    MaritimeArea('St Lucia Castries', 14.0101, -60.9875, 2000),
    MaritimeArea('Antigua St Johns', 17.1274, -61.8468, 2000),
    MaritimeArea('Puerto Rico San Juan', 18.4655, -66.1057, 2000),
    MaritimeArea('Dominican Republic', 18.4861, -69.9312, 2000),
    MaritimeArea('Belize City', 17.5046, -88.1962, 2000),
    MaritimeArea('Roatan Honduras', 16.3248, -86.5300, 2000),
    # SOUTH AMERICA
    MaritimeArea('Buenos Aires Port', -34.6118, -58.3960, 2000),
    MaritimeArea('Rio de Janeiro Port', -22.9068, -43.1729, 2000),
    MaritimeArea('Santos Brazil', -23.9618, -46.3322, 2000),
    MaritimeArea('Valparaiso Chile', -33.0472, -71.6127, 2000),
    MaritimeArea('Lima Callao Peru', -12.0464, -77.0428, 2000),
    MaritimeArea('Montevideo Uruguay', -34.9011, -56.1645, 2000),
    MaritimeArea('Ushuaia Argentina', -54.8019, -68.3030, 2000),
    MaritimeArea('Punta Arenas Chile', -53.1638, -70.9171, 2000),
    # TRANSATLANTIC & REPOSITIONING
    MaritimeArea('Bermuda Kings Wharf', 32.3293, -64.8351, 2000),
    MaritimeArea('Azores Ponta Delgada', 37.7412, -25.6756, 2000),
    MaritimeArea('Madeira Funchal', 32.6669, -16.9241, 2000),
    MaritimeArea('Canary Islands', 28.1235, -15.4363, 2000),
)


COASTLINES: Tuple[MaritimeArea, ...] = (
    # PACIFIC OCEAN - NORTH AMERICA
    MaritimeArea('California Coast', 34.0, -119.0, 60000),
    MaritimeArea('Baja California', 28.0, -114.0, 50000),
    MaritimeArea('Oregon Coast', 44.0, -124.0, 30000),
    MaritimeArea('Washington Coast', 47.6, -124.0, 25000),
    MaritimeArea('British Columbia', 52.0, -128.0, 60000),
    MaritimeArea('Alaska Southeast', 57.0, -135.0, 50000),
    MaritimeArea('Alaska Peninsula', 58.0, -158.0, 70000),
    MaritimeArea('Aleutian Islands', 52.0, -174.0, 40000),
    # PACIFIC OCEAN - ASIA
    MaritimeArea('Japan Main Islands', 36.0, 138.0, 80000),
    MaritimeArea('Japan Kyushu', 32.0, 131.0, 30000),
    MaritimeArea('Korea Peninsula', 37.0, 127.0, 40000),
    MaritimeArea('China East Coast', 30.0, 122.0, 70000),
    MaritimeArea('Taiwan', 24.0, 121.0, 20000),
    MaritimeArea('Philippines Luzon', 16.0, 121.0, 40000),
    MaritimeArea('Philippines Mindanao', 8.0, 125.0, 35000),
    MaritimeArea('Vietnam Coast', 16.0, 108.0, 50000),
    MaritimeArea('Thailand Gulf', 10.0, 100.0, 30000),
    MaritimeArea('Malaysia Peninsula', 4.0, 102.0, 35000),
    MaritimeArea('Indonesia Java', -7.0, 110.0, 60000),
    MaritimeArea('Indonesia Sumatra', -2.0, 102.0, 70000),
    MaritimeArea('Indonesia Borneo', 0.0, 114.0, 50000),
    MaritimeArea('Indonesia Sulawesi', -2.0, 121.0, 40000),
    MaritimeArea('New Guinea', -5.0, 141.0, 80000),
    # PACIFIC OCEAN - OCEANIA
    MaritimeArea('Australia East', -25.0, 153.0, 100000),
    MaritimeArea('Australia North', -15.0, 135.0, 80000),
    MaritimeArea('Australia West', -25.0, 114.0, 70000),
    MaritimeArea('Australia South', -35.0, 138.0, 60000),
    MaritimeArea('Tasmania', -42.0, 147.0, 25000),
    MaritimeArea('New Zealand North', -38.0, 176.0, 40000),
    MaritimeArea('New Zealand South', -44.0, 170.0, 35000),
    # PACIFIC ISLANDS
    MaritimeArea('Hawaii Chain', 21.0, -157.0, 20000),
    MaritimeArea('Fiji Islands', -17.0, 178.0, 15000),
    MaritimeArea('Tahiti Society Islands', -17.5, -149.5, 10000),
    MaritimeArea('Samoa Islands', -14.0, -171.0, 8000),
    MaritimeArea('Tonga Islands', -21.0, -175.0, 10000),
    MaritimeArea('New Caledonia', -21.5, 165.5, 15000),
    MaritimeArea('Vanuatu', -16.0, 167.0, 12000),
    MaritimeArea('Solomon Islands', -9.0, 160.0, 20000),
    MaritimeArea('Micronesia', 7.0, 158.0, 15000),
    MaritimeArea('Marshall Islands', 9.0, 168.0, 10000),
    MaritimeArea('Mariana Islands', 15.0, 145.0, 12000),
    # ATLANTIC OCEAN - AMERICAS
    MaritimeArea('Florida Coast', 27.0, -80.0, 50000),
    MaritimeArea('Georgia Coast', 32.0, -81.0, 30000),
    MaritimeArea('Carolina Coast', 35.0, -76.0, 40000),
    MaritimeArea('Virginia Coast', 37.0, -76.0, 30000),
    MaritimeArea('Mid Atlantic US', 39.0, -74.0, 35000),
    MaritimeArea('New York Coast', 40.7, -74.0, 25000),
    MaritimeArea('New England Coast', 42.0, -70.0, 30000),
    MaritimeArea('Nova Scotia', 45.0, -63.0, 35000),
    MaritimeArea('Newfoundland', 48.0, -54.0, 40000),
    MaritimeArea('Labrador Coast', 54.0, -58.0, 45000),
    # GULF OF MEXICO & CARIBBEAN
    MaritimeArea('Texas Coast', 29.0, -94.0, 40000),
    MaritimeArea('Louisiana Coast', 29.5, -90.0, 30000),
    MaritimeArea('Alabama Coast', 30.2, -88.0, 20000),
    MaritimeArea('Florida Gulf', 28.0, -83.0, 35000),
    MaritimeArea('Mexico Yucatan', 21.0, -88.0, 40000),
    MaritimeArea('Mexico East Coast', 19.0, -96.0, 45000),
    MaritimeArea('Cuba', 21.5, -80.0, 50000),
    MaritimeArea('Jamaica', 18.1, -77.3, 15000),
    MaritimeArea('Hispaniola', 19.0, -71.0, 25000),
    MaritimeArea('Puerto Rico', 18.2, -66.5, 12000),
    MaritimeArea('Lesser Antilles', 15.0, -61.0, 20000),
    MaritimeArea('Trinidad', 10.5, -61.3, 10000),
    MaritimeArea('Venezuela Coast', 10.5, -66.0, 40000),
    MaritimeArea('Colombia Caribbean', 11.0, -74.0, 30000),
    MaritimeArea('Panama Caribbean', 9.5, -79.5, 20000),
    MaritimeArea('Central America Caribbean', 13.0, -84.0, 35000),
    # SOUTH AMERICA
    MaritimeArea('Brazil North Coast', 0.0, -50.0, 60000),
    MaritimeArea('Brazil Northeast', -8.0, -35.0, 50000),
    MaritimeArea('Brazil Southeast', -23.0, -43.0, 45000),
    MaritimeArea('Brazil South', -28.0, -49.0, 35000),
    MaritimeArea('Uruguay Coast', -34.0, -54.0, 20000),
    MaritimeArea('Argentina Coast', -38.0, -57.0, 50000),
    MaritimeArea('Patagonia Atlantic', -45.0, -65.0, 40000),
    MaritimeArea('Tierra del Fuego', -54.0, -68.0, 25000),
    MaritimeArea('Chile South', -45.0, -74.0, 60000),
    MaritimeArea('Chile Central', -33.0, -71.5, 40000),
    MaritimeArea('Chile North', -23.0, -70.0, 35000),
    MaritimeArea('Peru Coast', -12.0, -77.0, 40000),
    MaritimeArea('Ecuador Coast', -2.0, -81.0, 25000),
    MaritimeArea('Colombia Pacific', 4.0, -77.0, 30000),
    MaritimeArea('Panama Pacific', 8.0, -79.0, 20000),
    # ATLANTIC OCEAN - EUROPE & AFRICA
    MaritimeArea('Morocco Coast', 33.0, -7.0, 40000),
    MaritimeArea('Portugal Coast', 39.0, -9.0, 30000),
    MaritimeArea('Spain Atlantic', 43.0, -8.0, 35000),
    MaritimeArea('France Atlantic', 46.0, -2.0, 40000),
    MaritimeArea('UK South Coast', 50.5, -2.0, 35000),
    MaritimeArea('Ireland', 53.0, -8.0, 30000),
    MaritimeArea('UK West Coast', 55.0, -5.0, 35000),
    MaritimeArea('Iceland', 65.0, -18.0, 25000),
    MaritimeArea('Greenland South', 60.0, -44.0, 50000),
    MaritimeArea('Greenland East', 68.0, -30.0, 60000),
    MaritimeArea('West Africa North', 20.0, -17.0, 50000),
    MaritimeArea('West Africa Central', 5.0, -5.0, 60000),
    MaritimeArea('West Africa South', -15.0, 12.0, 50000),
    MaritimeArea('South Africa West', -30.0, 17.0, 35000),
    MaritimeArea('South Africa South', -34.5, 20.0, 40000),
    # MEDITERRANEAN SEA
    MaritimeArea('Spain Mediterranean', 39.0, 0.0, 40000),
    MaritimeArea('France Mediterranean', 43.0, 6.0, 25000),
    MaritimeArea('Italy West', 42.0, 11.0, 35000),
    MaritimeArea('Italy South', 38.0, 16.0, 30000),
    MaritimeArea('Italy East', 42.0, 18.0, 35000),
    MaritimeArea('Balkans Coast', 42.0, 19.0, 40000),
    MaritimeArea('Greece Mainland', 38.0, 23.0, 35000),
    MaritimeArea('Turkey Mediterranean', 36.0, 32.0, 45000),
    MaritimeArea('Cyprus', 35.0, 33.0, 15000),
    MaritimeArea('Levant Coast', 33.0, 35.0, 30000),
    MaritimeArea('Egypt Mediterranean', 31.0, 30.0, 35000),
    MaritimeArea('Libya Coast', 32.0, 20.0, 50000),
    MaritimeArea('Tunisia Coast', 36.0, 10.0, 25000),
    MaritimeArea('Algeria Coast', 36.5, 3.0, 40000),
    MaritimeArea('Morocco Mediterranean', 35.5, -5.0, 20000),
    # BALTIC & NORTH SEA
    MaritimeArea('Norway Coast', 62.0, 6.0, 80000),
    MaritimeArea('Sweden West', 58.0, 11.0, 40000),
    MaritimeArea('Denmark', 56.0, 10.0, 25000),
    MaritimeArea('Germany Baltic', 54.0, 13.0, 20000),
    MaritimeArea('Poland Coast', 54.5, 18.0, 25000),
    MaritimeArea('Baltic States', 57.0, 24.0, 35000),
    MaritimeArea('Finland Coast', 60.0, 25.0, 40000),
    MaritimeArea('Russia Baltic', 60.0, 28.0, 30000),
    MaritimeArea('Sweden East', 59.0, 18.0, 45000),
    # INDIAN OCEAN
    MaritimeArea('East Africa Coast', -5.0, 40.0, 60000),
    MaritimeArea('Somalia Coast', 5.0, 48.0, 50000),
    MaritimeArea('Arabian Peninsula', 20.0, 55.0, 70000),
    MaritimeArea('Iran Coast', 27.0, 56.0, 40000),
    MaritimeArea('Pakistan Coast', 25.0, 66.0, 35000),
    MaritimeArea('India West Coast', 15.0, 73.0, 60000),
    MaritimeArea('India South', 10.0, 77.0, 30000),
    MaritimeArea('India East Coast', 15.0, 80.0, 50000),
    MaritimeArea('Sri Lanka', 7.0, 81.0, 20000),
    MaritimeArea('Bangladesh Coast', 22.0, 91.0, 25000),
    MaritimeArea('Myanmar Coast', 16.0, 96.0, 40000),
    MaritimeArea('Thailand Andaman', 8.0, 98.0, 30000),
    MaritimeArea('Malaysia West', 4.0, 100.0, 35000),
    MaritimeArea('Sumatra West', 0.0, 100.0, 60000),
    MaritimeArea('Madagascar', -20.0, 47.0, 50000),
    MaritimeArea('Mauritius Region', -20.0, 57.0, 15000),
    MaritimeArea('Seychelles', -5.0, 55.0, 10000),
    MaritimeArea('Maldives', 4.0, 73.0, 12000),
    # ARCTIC OCEAN
    MaritimeArea('Norway Arctic', 70.0, 20.0, 50000),
    MaritimeArea('Russia Arctic', 72.0, 60.0, 100000),
    MaritimeArea('Canada Arctic', 72.0, -100.0, 80000),
    MaritimeArea('Alaska Arctic', 70.0, -150.0, 60000),
    MaritimeArea('Svalbard', 78.0, 20.0, 20000),
    # ANTARCTIC
    MaritimeArea('Antarctic Peninsula', -65.0, -60.0, 40000),
    MaritimeArea('Ross Sea Region', -75.0, -175.0, 50000),
    MaritimeArea('East Antarctica', -70.0, 90.0, 100000),
)
