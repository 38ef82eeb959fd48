# src/lightprop/simulation/errors.py


class LightPropError(Exception):
    """lightprop 所有异常的基类"""


class ConfigError(LightPropError, ValueError):
    """配置非法（半径<=0、域尺寸非正、网格数<2 等），在初始化阶段抛出"""


class PhotonStateError(LightPropError, RuntimeError):
    """对已终止的光子继续写入路径"""


class SimulationError(LightPropError, RuntimeError):
    """运行期异常，例如单个光子超过 max_ticks 仍未终止"""
