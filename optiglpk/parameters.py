"""
Parameters class for the GLPK solver
"""
from ._native import glpk


class Parameters:
    """
    Configuration parameters for the GLPK simplex and branch-and-bound runs.

    Attributes
    ----------
    msg_lev : int
        GLPK message level: GLP_MSG_OFF, GLP_MSG_ERR (default), GLP_MSG_ON or GLP_MSG_ALL
    time_limit : float or None
        Time limit per GLPK call in seconds (default: None, no limit)
    it_lim : int or None
        Simplex iteration limit (default: None, no limit)
    presolve : bool
        Use the LP presolver in the simplex run (default: False)
    br_tech : int
        Branching technique (default: GLP_BR_DTH)
    bt_tech : int
        Backtracking technique (default: GLP_BT_BLB)
    pp_tech : int
        MIP preprocessing technique (default: GLP_PP_ALL)
    mir_cuts : bool
        Mixed integer rounding cuts (default: False)
    gmi_cuts : bool
        Gomory's mixed integer cuts (default: False)
    cov_cuts : bool
        Mixed cover cuts (default: False)
    clq_cuts : bool
        Clique cuts (default: False)

    Examples
    --------
    >>> param = Parameters()
    >>> param.msg_lev = glpk.GLP_MSG_ALL
    >>> param.time_limit = 30.0
    >>> param.gmi_cuts = True
    """

    def __init__(self):
        self.msg_lev = glpk.GLP_MSG_ERR
        self.time_limit = None
        self.it_lim = None
        self.presolve = False
        self.br_tech = glpk.GLP_BR_DTH
        self.bt_tech = glpk.GLP_BT_BLB
        self.pp_tech = glpk.GLP_PP_ALL
        self.mir_cuts = False
        self.gmi_cuts = False
        self.cov_cuts = False
        self.clq_cuts = False

    def __repr__(self):
        return (f"Parameters(msg_lev={self.msg_lev}, "
                f"time_limit={self.time_limit}, "
                f"presolve={self.presolve})")

    def _tm_lim(self):
        if self.time_limit is None:
            return None
        return max(0, int(self.time_limit * 1000))

    def to_smcp(self):
        """Convert to a GLPK simplex control structure (glp_smcp)"""
        smcp = glpk.glp_smcp()
        glpk.glp_init_smcp(smcp)
        smcp.msg_lev = self.msg_lev
        smcp.presolve = glpk.GLP_ON if self.presolve else glpk.GLP_OFF
        if self._tm_lim() is not None:
            smcp.tm_lim = self._tm_lim()
        if self.it_lim is not None:
            smcp.it_lim = int(self.it_lim)
        return smcp

    def to_iocp(self):
        """Convert to a GLPK integer optimizer control structure (glp_iocp)"""
        iocp = glpk.glp_iocp()
        glpk.glp_init_iocp(iocp)
        iocp.msg_lev = self.msg_lev
        iocp.br_tech = self.br_tech
        iocp.bt_tech = self.bt_tech
        iocp.pp_tech = self.pp_tech
        iocp.mir_cuts = glpk.GLP_ON if self.mir_cuts else glpk.GLP_OFF
        iocp.gmi_cuts = glpk.GLP_ON if self.gmi_cuts else glpk.GLP_OFF
        iocp.cov_cuts = glpk.GLP_ON if self.cov_cuts else glpk.GLP_OFF
        iocp.clq_cuts = glpk.GLP_ON if self.clq_cuts else glpk.GLP_OFF
        # Branch-and-bound starts from the relaxation solved by glp_simplex
        iocp.presolve = glpk.GLP_OFF
        if self._tm_lim() is not None:
            iocp.tm_lim = self._tm_lim()
        return iocp

    @classmethod
    def from_dict(cls, d):
        """Create Parameters from dictionary"""
        param = cls()
        for key, value in d.items():
            if hasattr(param, key):
                setattr(param, key, value)
        return param

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'msg_lev': self.msg_lev,
            'time_limit': self.time_limit,
            'it_lim': self.it_lim,
            'presolve': self.presolve,
            'br_tech': self.br_tech,
            'bt_tech': self.bt_tech,
            'pp_tech': self.pp_tech,
            'mir_cuts': self.mir_cuts,
            'gmi_cuts': self.gmi_cuts,
            'cov_cuts': self.cov_cuts,
            'clq_cuts': self.clq_cuts,
        }
