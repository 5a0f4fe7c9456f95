import numpy as np
import pytest
from c45tree.dataset import get_demo_dataset


PLAY_TENNIS_CSV = """Outlook,Temperature,Humidity,Wind,PlayTennis
Sunny,Hot,High,Weak,No
Sunny,Hot,High,Strong,No
Overcast,Hot,High,Weak,Yes
Rain,Mild,High,Weak,Yes
Rain,Cool,Normal,Weak,Yes
Rain,Cool,Normal,Strong,No
Overcast,Cool,Normal,Strong,Yes
Sunny,Mild,High,Weak,No
Sunny,Cool,Normal,Weak,Yes
Rain,Mild,Normal,Weak,Yes
Sunny,Mild,Normal,Strong,Yes
Overcast,Mild,High,Strong,Yes
Overcast,Hot,Normal,Weak,Yes
Rain,Mild,High,Strong,No
"""


@pytest.fixture
def demo_data():
    return get_demo_dataset()


@pytest.fixture
def play_tennis_file(tmp_path):
    path = tmp_path / "play_tennis.csv"
    path.write_text(PLAY_TENNIS_CSV)
    return str(path)


@pytest.fixture
def random_data():
    """60 rows over 4 attributes with 3 values each and 3 classes"""
    rng = np.random.RandomState(0)
    X = rng.randint(0, 3, size=(60, 4)).tolist()
    y = rng.randint(0, 3, size=60).tolist()
    return X, y, {0, 1, 2, 3}
